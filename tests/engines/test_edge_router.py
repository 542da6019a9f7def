"""
Tests for edge stitching: split on insert, bridge on delete, link on connect.
"""

import pytest

from workflow_engines.edge_router import bridge, incident_edges, is_bridgeable, link, split
from workflow_kernel.domain.graph import Edge, EdgePresentation
from workflow_kernel.exceptions import EdgeNotFoundError

RED = EdgePresentation(stroke="#FF0000")


def _ids(edges) -> list[str]:
    return [e.id for e in edges]


class TestSplit:

    def test_replaces_anchor_with_two_edges(self):
        edges = (Edge.between("start", "end"),)
        result = split("e-start-end", "task-1", edges)
        assert _ids(result) == ["e-start-task-1", "e-task-1-end"]

    def test_other_edges_kept(self):
        edges = (Edge.between("start", "a"), Edge.between("a", "end"))
        result = split("e-a-end", "b", edges)
        assert _ids(result) == ["e-start-a", "e-a-b", "e-b-end"]

    def test_copies_anchor_presentation(self):
        edges = (Edge.between("start", "end", RED),)
        assert all(e.presentation == RED for e in split("e-start-end", "n", edges))

    def test_unknown_edge_raises(self):
        with pytest.raises(EdgeNotFoundError) as exc_info:
            split("e-x-y", "n", (Edge.between("start", "end"),))
        assert exc_info.value.edge_id == "e-x-y"


class TestBridge:

    def test_joins_neighbors(self):
        edges = (Edge.between("start", "a"), Edge.between("a", "end"))
        assert _ids(bridge("a", edges)) == ["e-start-end"]

    def test_bridge_uses_inbound_presentation(self):
        edges = (Edge.between("start", "a", RED), Edge.between("a", "end"))
        (joined,) = bridge("a", edges)
        assert joined.presentation == RED

    def test_middle_of_chain(self):
        edges = (
            Edge.between("start", "a"),
            Edge.between("a", "b"),
            Edge.between("b", "c"),
            Edge.between("c", "end"),
        )
        assert _ids(bridge("b", edges)) == ["e-start-a", "e-c-end", "e-a-c"]

    def test_existing_bridge_id_not_duplicated(self):
        edges = (
            Edge.between("start", "a"),
            Edge.between("a", "end"),
            Edge.between("start", "end"),
        )
        assert _ids(bridge("a", edges)) == ["e-start-end"]

    def test_unbridgeable_drops_dangling_edges(self):
        edges = (
            Edge.between("start", "a"),
            Edge.between("x", "a"),
            Edge.between("a", "end"),
        )
        assert not is_bridgeable("a", edges)
        assert bridge("a", edges) == ()

    def test_only_inbound_edges_not_bridgeable(self):
        edges = (Edge.between("start", "a"), Edge.between("x", "a"))
        assert not is_bridgeable("a", edges)


class TestLink:

    def test_appends_edge(self):
        edges = (Edge.between("start", "end"),)
        assert _ids(link("start", "a", edges)) == ["e-start-end", "e-start-a"]

    def test_existing_id_unchanged(self):
        edges = (Edge.between("start", "end"),)
        assert link("start", "end", edges) is edges

    def test_presentation_applied(self):
        result = link("a", "b", (), RED)
        assert result[0].presentation == RED


def test_incident_edges():
    edges = (Edge.between("start", "a"), Edge.between("a", "end"), Edge.between("start", "end"))
    assert _ids(incident_edges("a", edges)) == ["e-start-a", "e-a-end"]
