from __future__ import annotations

from framework_factory import edge, node, sound_framework
from lfa_diagnostics import GraphBuilder
from lfa_diagnostics.phases import StructuralValidator


def _validate(nodes, edges):
    outcome = GraphBuilder().build(nodes, edges)
    return StructuralValidator().validate(outcome.graph, outcome.rejected_edges)


def test_sound_framework_has_no_structural_findings() -> None:
    assert _validate(*sound_framework()) == []


def test_orphan_nodes_are_warnings_but_comments_are_exempt() -> None:
    findings = _validate([node("int", "intervention"), node("note", "comment")], [])

    assert [(f.rule, f.severity, f.node_id) for f in findings] == [("orphan_node", "warning", "int")]
    assert findings[0].fix_suggestion == "Connect this node to the rest of the framework."


def test_dangling_edge_is_critical_and_locates_the_edge() -> None:
    findings = _validate([node("a", "output"), node("b", "outcome")], [
        edge("ok", "a", "b", "leads_to"),
        edge("broken", "a", "missing", "leads_to"),
    ])

    dangling = [f for f in findings if f.rule == "dangling_edge"]
    assert [(f.severity, f.edge_id, f.node_id) for f in dangling] == [("critical", "broken", None)]


def test_incompatible_interaction_types_are_warnings() -> None:
    nodes = [
        node("int", "intervention"),
        node("out", "output"),
        node("goal", "goal"),
        node("risk", "risk"),
        node("note", "comment"),
    ]
    edges = [
        edge("ok", "int", "out", "delivers"),
        edge("bad-delivers", "out", "goal", "delivers"),
        edge("bad-requires", "int", "risk", "requires"),
        edge("untyped", "goal", "int"),
        edge("annotated", "note", "goal", "monitors"),
    ]

    findings = [f for f in _validate(nodes, edges) if f.rule == "incompatible_edge"]

    assert [(f.edge_id, f.severity) for f in findings] == [
        ("bad-delivers", "warning"),
        ("bad-requires", "warning"),
    ]


def test_two_node_cycle_reports_exactly_one_critical_finding() -> None:
    nodes = [node("A", "intervention", "Training"), node("B", "outcome", "Reading")]
    edges = [edge("ab", "A", "B", "leads_to"), edge("ba", "B", "A", "leads_to")]

    cycles = [f for f in _validate(nodes, edges) if f.rule == "chain_cycle"]

    assert len(cycles) == 1
    assert cycles[0].severity == "critical"
    assert cycles[0].message == "Circular logic: Training eventually depends on itself."


def test_cycles_through_risk_nodes_are_not_chain_cycles() -> None:
    nodes = [node("oc", "outcome"), node("risk", "risk")]
    edges = [edge("a", "oc", "risk", "requires"), edge("b", "risk", "oc")]

    assert [f for f in _validate(nodes, edges) if f.rule == "chain_cycle"] == []


def test_cycle_detection_covers_disconnected_components() -> None:
    nodes = [
        node("a", "output"),
        node("b", "outcome"),
        node("c", "output"),
        node("d", "outcome"),
    ]
    edges = [
        edge("ab", "a", "b", "leads_to"),
        edge("cd", "c", "d", "leads_to"),
        edge("dc", "d", "c", "leads_to"),
    ]

    cycles = [f for f in _validate(nodes, edges) if f.rule == "chain_cycle"]

    assert [f.node_id for f in cycles] == ["c"]


def test_disconnected_islands_are_one_graph_wide_warning() -> None:
    nodes = [node("a", "output"), node("b", "outcome"), node("c", "output"), node("d", "outcome")]
    edges = [edge("ab", "a", "b", "leads_to"), edge("cd", "c", "d", "leads_to")]

    islands = [f for f in _validate(nodes, edges) if f.rule == "logic_islands"]

    assert len(islands) == 1
    assert islands[0].node_id is None and islands[0].edge_id is None
    assert "2 groups" in islands[0].message


def test_untyped_arrow_leaving_the_goal_is_a_warning() -> None:
    nodes, edges = sound_framework()
    nodes.append(node("oc2", "outcome"))
    edges.append(edge("back", "goal", "oc2"))

    findings = [f for f in _validate(nodes, edges) if f.rule == "goal_outgoing"]

    assert [(f.edge_id, f.severity, f.title) for f in findings] == [
        ("back", "warning", "Goal has Outgoing Connection")
    ]


def test_untyped_outcome_to_intervention_is_backward_flow() -> None:
    nodes = [node("int", "intervention"), node("oc", "outcome"), node("risk", "risk"), node("goal", "goal")]
    edges = [
        edge("backward", "oc", "int"),
        edge("assumption", "goal", "risk"),
    ]

    findings = _validate(nodes, edges)

    assert [(f.rule, f.severity, f.edge_id) for f in findings if f.edge_id] == [
        ("backward_flow", "critical", "backward")
    ]


def test_typed_edges_are_not_reported_twice_for_direction() -> None:
    nodes = [node("int", "intervention"), node("oc", "outcome"), node("goal", "goal")]
    edges = [edge("a", "oc", "int", "leads_to"), edge("b", "goal", "oc", "leads_to")]

    findings = [f for f in _validate(nodes, edges) if f.edge_id]

    assert sorted((f.rule, f.edge_id) for f in findings) == [
        ("incompatible_edge", "a"),
        ("incompatible_edge", "b"),
    ]
