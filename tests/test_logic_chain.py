from __future__ import annotations

from framework_factory import edge, indicator, node, sound_framework
from lfa_diagnostics import GraphBuilder
from lfa_diagnostics.phases import LogicChainValidator


def _validate(nodes, edges):
    return LogicChainValidator().validate(GraphBuilder().build(nodes, edges).graph)


def _titles(findings):
    return [(f.title, f.node_id) for f in findings]


def test_sound_framework_has_no_chain_findings() -> None:
    assert _validate(*sound_framework()) == []


def test_intervention_linked_only_to_a_risk_is_a_dead_end() -> None:
    nodes = [node("int", "intervention", "Kit distribution"), node("risk", "risk")]
    edges = [edge("e", "int", "risk", "requires")]

    dead_ends = [f for f in _validate(nodes, edges) if f.rule == "dead_end_intervention"]

    assert [(f.severity, f.node_id) for f in dead_ends] == [("critical", "int")]
    assert "no path to a Goal" in dead_ends[0].message


def test_intervention_reaching_goal_through_output_and_outcome_is_not_a_dead_end() -> None:
    nodes = [node("int", "intervention"), node("out", "output"), node("oc", "outcome"), node("goal", "goal")]
    edges = [
        edge("a", "int", "out", "delivers"),
        edge("b", "out", "oc", "leads_to"),
        edge("c", "oc", "goal", "leads_to"),
    ]

    assert [f for f in _validate(nodes, edges) if f.rule == "dead_end_intervention"] == []


def test_reachability_ignores_monitors_edges_and_stakeholder_hops() -> None:
    nodes = [node("int", "intervention"), node("sh", "stakeholder"), node("goal", "goal")]
    edges = [edge("a", "int", "sh", "delivers"), edge("b", "sh", "goal", "monitors")]

    assert ("Dead-end Intervention", "int") in _titles(_validate(nodes, edges))


def test_unmeasured_outcome_and_goal() -> None:
    nodes = [node("out", "output"), node("oc", "outcome"), node("goal", "goal"), node("risk", "risk")]
    edges = [
        edge("a", "out", "oc", "leads_to", []),
        edge("b", "oc", "goal", "leads_to", [indicator()]),
        edge("c", "oc", "risk", "requires"),
    ]

    findings = _validate(nodes, edges)

    assert _titles(findings) == [("Unmeasured Outcome", "oc")]
    assert findings[0].severity == "warning"


def test_one_measured_incoming_edge_is_enough() -> None:
    nodes = [node("o1", "output"), node("o2", "output"), node("goal", "goal")]
    edges = [edge("a", "o1", "goal", "leads_to"), edge("b", "o2", "goal", "leads_to", [indicator()])]

    assert _validate(nodes, edges) == []


def test_outcome_without_risk_gets_info() -> None:
    nodes = [node("out", "output"), node("oc", "outcome"), node("goal", "goal")]
    edges = [edge("a", "out", "oc", "leads_to", [indicator()]), edge("b", "oc", "goal", "leads_to", [indicator()])]

    findings = _validate(nodes, edges)

    assert [(f.severity, f.title, f.node_id) for f in findings] == [("info", "Undocumented Assumptions", "oc")]


def test_risk_linked_in_either_direction_counts() -> None:
    nodes = [node("out", "output"), node("oc", "outcome"), node("goal", "goal"), node("risk", "risk")]
    edges = [
        edge("a", "out", "oc", "leads_to", [indicator()]),
        edge("b", "oc", "goal", "leads_to", [indicator()]),
        edge("c", "risk", "oc"),
    ]

    assert _validate(nodes, edges) == []


def test_missing_goal_is_graph_wide_only_once_a_chain_exists() -> None:
    assert _validate([node("int", "intervention")], []) == []

    findings = _validate([node("int", "intervention"), node("out", "output")], [edge("a", "int", "out", "delivers")])

    missing = [f for f in findings if f.rule == "missing_goal"]
    assert len(missing) == 1
    assert missing[0].node_id is None


def test_orphan_nodes_are_left_to_the_structural_pass() -> None:
    assert _validate([node("int", "intervention"), node("oc", "outcome"), node("goal", "goal")], []) == []


def test_each_node_reports_a_title_once_across_multiple_paths() -> None:
    nodes = [node("int", "intervention"), node("o1", "output"), node("o2", "output"), node("oc", "outcome")]
    edges = [
        edge("a", "int", "o1", "delivers"),
        edge("b", "int", "o2", "delivers"),
        edge("c", "o1", "oc", "leads_to"),
        edge("d", "o2", "oc", "leads_to"),
    ]

    titles = _titles(_validate(nodes, edges))

    assert len(titles) == len(set(titles))
    assert titles.count(("Dead-end Intervention", "int")) == 1
