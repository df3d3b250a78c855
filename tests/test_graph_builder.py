from __future__ import annotations

import pytest

from framework_factory import edge, node
from lfa_diagnostics import GraphBuilder, InvalidInput
from lfa_diagnostics.graph_model import InterventionAttributes, StakeholderAttributes


def test_build_indexes_edges_by_source_target_and_type() -> None:
    nodes = [
        node("int", "intervention", cost_level="low", complexity=2),
        node("out", "output"),
        node("sh", "stakeholder", bandwidth=4),
    ]
    edges = [edge("e1", "int", "out", "delivers"), edge("e2", "int", "sh", "delivers")]

    outcome = GraphBuilder().build(nodes, edges)
    graph = outcome.graph

    assert [e.id for e in graph.outgoing["int"]] == ["e1", "e2"]
    assert [e.id for e in graph.incoming["out"]] == ["e1"]
    assert [n.id for n in graph.nodes_of("stakeholder")] == ["sh"]
    assert graph.nodes["int"].attributes == InterventionAttributes(cost_level="LOW", complexity=2)
    assert graph.nodes["sh"].attributes == StakeholderAttributes(bandwidth=4)
    assert outcome.findings == []
    assert outcome.rejected_edges == []


def test_dangling_edges_are_kept_out_of_the_graph() -> None:
    outcome = GraphBuilder().build([node("a", "output")], [edge("e1", "a", "ghost", "leads_to")])

    assert outcome.graph.edges == {}
    assert [e.id for e in outcome.rejected_edges] == ["e1"]
    assert outcome.graph.degree("a") == 0


def test_duplicate_ids_yield_single_critical_finding_and_last_definition_wins() -> None:
    nodes = [
        node("a", "output", "first"),
        node("a", "output", "second"),
        node("b", "goal"),
    ]
    edges = [edge("e", "a", "b", "leads_to"), edge("e", "b", "a")]

    outcome = GraphBuilder().build(nodes, edges)

    assert len(outcome.findings) == 1
    finding = outcome.findings[0]
    assert finding.severity == "critical"
    assert finding.rule == "duplicate_id"
    assert finding.node_id is None and finding.edge_id is None
    assert outcome.graph.nodes["a"].label == "second"
    assert outcome.graph.edges["e"].source == "b"


def test_ui_state_is_ignored_and_unknown_keys_pass_through() -> None:
    raw = node(
        "sh",
        "stakeholder",
        status="error",
        errorMessage="old",
        currentLoad=7,
        customProps={"colour": "red"},
        notes="talk to the HM",
    )

    graph_node = GraphBuilder().build([raw], []).graph.nodes["sh"]

    assert graph_node.extras == {"customProps": {"colour": "red"}, "notes": "talk to the HM"}
    assert graph_node.extras["customProps"] is not raw["data"]["customProps"]


def test_fields_of_another_type_are_not_applied() -> None:
    graph_node = GraphBuilder().build([node("out", "output", bandwidth=3)], []).graph.nodes["out"]

    assert graph_node.extras == {"bandwidth": 3}
    assert not hasattr(graph_node.attributes, "bandwidth")


def test_type_may_come_from_node_data() -> None:
    raw = {"id": "g", "data": {"label": "Goal", "type": "goal"}}

    assert GraphBuilder().build([raw], []).graph.nodes["g"].type == "goal"


def test_indicators_are_parsed_in_order() -> None:
    raw_edge = edge(
        "e",
        "a",
        "b",
        "leads_to",
        [{"id": "i1", "label": "Reading", "unit": "%", "targetValue": 80}, {"label": "Visits", "unit": "Count"}],
    )
    graph = GraphBuilder().build([node("a", "output"), node("b", "outcome")], [raw_edge]).graph

    indicators = graph.edges["e"].indicators
    assert [i.label for i in indicators] == ["Reading", "Visits"]
    assert indicators[0].target_value == 80
    assert indicators[1].target_value is None


@pytest.mark.parametrize(
    "nodes, edges",
    [
        ("not-a-list", []),
        ([], {"id": "e"}),
        ([{"type": "goal"}], []),
        (["goal"], []),
        ([node("a", "widget")], []),
        ([node("a", "stakeholder", bandwidth="three")], []),
        ([node("a", "stakeholder", bandwidth=True)], []),
        ([node("a", "intervention", cost_level="EXTREME")], []),
        ([node("a", "output")], [edge("e", "a", "a", "teleports")]),
        ([node("a", "output")], [{"id": "e", "source": "a"}]),
        ([node("a", "output")], [edge("e", "a", "a", "leads_to", indicators="none")]),
        ([node("a", "output")], [edge("e", "a", "a", "delivers", weight=-1)]),
    ],
)
def test_wrong_shapes_raise_invalid_input(nodes, edges) -> None:
    with pytest.raises(InvalidInput):
        GraphBuilder().build(nodes, edges)
