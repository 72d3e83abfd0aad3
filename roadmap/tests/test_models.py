"""Tests for the graph model and status vocabularies."""

import pytest
from pydantic import ValidationError

from roadmap.models.progress_record import ProgressRecord, ProgressStats
from roadmap.models.roadmap_graph import NodeData, Roadmap, RoadmapNode
from roadmap.models.status import (
    NodeStatus,
    NodeType,
    PersistedStatus,
    from_persisted,
    is_trackable,
    to_persisted,
)
from roadmap.utils.identifiers import utc_timestamp


def _node(node_id: str, node_type: str = "required", status: str = "pending") -> dict:
    return {"id": node_id, "data": {"label": node_id.title(), "type": node_type, "status": status}}


class TestStatusMapping:
    """Test conversion between the in-memory and stored vocabularies."""

    @pytest.mark.parametrize("status", list(NodeStatus))
    def test_round_trip_is_identity(self, status):
        """Every in-memory status survives a trip through storage."""
        assert from_persisted(to_persisted(status)) == status

    def test_mapping_is_a_bijection(self):
        """Four distinct stored values, one per in-memory value."""
        stored = {to_persisted(status) for status in NodeStatus}
        assert stored == set(PersistedStatus)

    def test_known_stored_values(self):
        """Stored values match the existing database vocabulary."""
        assert to_persisted("pending") == PersistedStatus.pendiente
        assert to_persisted("in-progress") == PersistedStatus.en_progreso
        assert to_persisted("completed") == PersistedStatus.completado
        assert to_persisted("skipped") == PersistedStatus.omitida

    def test_accepts_raw_strings(self):
        """Conversions accept plain string values."""
        assert from_persisted("completado") == NodeStatus.completed

    def test_rejects_unknown_values(self):
        """Values outside either vocabulary raise ValueError."""
        with pytest.raises(ValueError):
            to_persisted("done")
        with pytest.raises(ValueError):
            from_persisted("completed")

    def test_trackable_types(self):
        """Only required and optional nodes carry status."""
        assert is_trackable(NodeType.required)
        assert is_trackable("optional")
        assert not is_trackable(NodeType.phase)


class TestNodeData:
    """Test node metadata parsing."""

    def test_status_defaults_to_pending(self):
        data = NodeData(label="HTML", type="required")
        assert data.status == NodeStatus.pending

    def test_accepts_camel_case_keys(self):
        """Definition files use camelCase metadata keys."""
        data = NodeData.model_validate({
            "label": "HTML",
            "type": "required",
            "detailedDescription": "Long text",
            "isPrincipal": True,
            "estimatedTime": "1 week",
            "keyConcepts": [{"name": "Forms", "tooltip": "inputs"}],
            "learningPath": [{"step": 1, "title": "Skeleton"}],
        })
        assert data.detailed_description == "Long text"
        assert data.is_principal is True
        assert data.key_concepts[0].name == "Forms"
        assert data.learning_path[0].completed is False

    def test_difficulty_range(self):
        with pytest.raises(ValidationError):
            NodeData(label="X", type="required", difficulty=6)

    def test_status_assignment_is_validated(self):
        """Assigning a raw string stores the enum; unknown values are rejected."""
        data = NodeData(label="HTML", type="required")
        data.status = "completed"
        assert data.status is NodeStatus.completed
        with pytest.raises(ValidationError):
            data.status = "finished"

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            NodeData(label="X", type="bonus")


class TestRoadmapValidation:
    """Test graph-level identity invariants."""

    def test_valid_roadmap(self):
        roadmap = Roadmap.model_validate({
            "nodes": [_node("a"), _node("b", "optional")],
            "edges": [{"id": "e1", "source": "a", "target": "b"}],
        })
        assert [n.id for n in roadmap.nodes] == ["a", "b"]
        assert roadmap.get_node("b").data.type == NodeType.optional
        assert roadmap.get_node("missing") is None

    def test_rejects_duplicate_node_ids(self):
        with pytest.raises(ValidationError) as exc_info:
            Roadmap.model_validate({"nodes": [_node("a"), _node("a")]})
        assert "duplicate node id" in str(exc_info.value)

    def test_rejects_duplicate_edge_ids(self):
        with pytest.raises(ValidationError):
            Roadmap.model_validate({
                "nodes": [_node("a"), _node("b")],
                "edges": [
                    {"id": "e1", "source": "a", "target": "b"},
                    {"id": "e1", "source": "b", "target": "a"},
                ],
            })

    def test_rejects_dangling_edge(self):
        with pytest.raises(ValidationError) as exc_info:
            Roadmap.model_validate({
                "nodes": [_node("a")],
                "edges": [{"id": "e1", "source": "a", "target": "ghost"}],
            })
        assert "ghost" in str(exc_info.value)

    def test_phase_node_is_not_trackable(self):
        node = RoadmapNode.model_validate(_node("p", "phase"))
        assert node.trackable is False


class TestProgressModels:
    """Test persisted record and statistics models."""

    def test_record_requires_stored_vocabulary(self):
        record = ProgressRecord(id="a", status="completado", updated_at=utc_timestamp())
        assert record.status == PersistedStatus.completado
        with pytest.raises(ValidationError):
            ProgressRecord(id="a", status="completed", updated_at=utc_timestamp())

    def test_stats_dump_uses_camel_case(self):
        """The renderer reads camelCase statistic keys."""
        stats = ProgressStats(completed=1, total=2, in_progress=1, progress_percentage=50.0)
        dumped = stats.model_dump(by_alias=True)
        assert dumped["progressPercentage"] == 50.0
        assert dumped["inProgress"] == 1
        assert dumped["requiredTotal"] == 0
