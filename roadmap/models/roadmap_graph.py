"""Data model for the roadmap graph.

Nodes and edges are built once from a static definition file. After that
only `NodeData.status` changes, through the progress store.
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roadmap.models.status import NodeStatus, NodeType, is_trackable


class KeyConcept(BaseModel):
    """a concept highlighted on the node card, with hover text."""

    name: str
    tooltip: str


class LearningStep(BaseModel):
    """one step of the suggested learning path for a topic."""

    step: int
    title: str
    completed: bool = False


class Resources(BaseModel):
    """links attached to a topic."""

    documentation: str = ""
    video: str = ""
    additional: str = ""


class Position(BaseModel):
    """canvas coordinates used by the graph renderer."""

    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    """descriptive metadata plus the mutable status of a topic."""

    # definition files use camelCase keys, python code uses snake_case
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    label: str
    type: NodeType
    status: NodeStatus = NodeStatus.pending

    description: str | None = None
    detailed_description: str | None = Field(default=None, alias="detailedDescription")
    difficulty: int | None = Field(default=None, ge=1, le=5)
    is_principal: bool | None = Field(default=None, alias="isPrincipal")
    estimated_time: str | None = Field(default=None, alias="estimatedTime")
    key_concepts: list[KeyConcept] | None = Field(default=None, alias="keyConcepts")
    learning_path: list[LearningStep] | None = Field(default=None, alias="learningPath")
    resources: Resources | None = None
    technologies: list[str] | None = None
    importance: str | None = None
    links: list[str] | None = None
    progress: float | None = None


class RoadmapNode(BaseModel):
    """a vertex of the roadmap graph, one topic."""

    id: str
    type: str = "custom"  # renderer component name, not the NodeType
    position: Position = Field(default_factory=Position)
    data: NodeData

    @property
    def trackable(self) -> bool:
        """required and optional topics carry status, phases do not."""
        return is_trackable(self.data.type)


class RoadmapEdge(BaseModel):
    """a directed dependency/ordering edge between two topics."""

    id: str
    source: str
    target: str
    type: str | None = None
    style: dict[str, Any] | None = None


class Roadmap(BaseModel):
    """the full graph as loaded from a definition file."""

    roadmap_id: str = "default"
    name: str = "Roadmap"
    description: str | None = None
    nodes: list[RoadmapNode]
    edges: list[RoadmapEdge] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_identities(self) -> Self:
        """node ids and edge ids are unique, edges point at existing nodes."""
        node_ids: set[str] = set()
        for node in self.nodes:
            if node.id in node_ids:
                raise ValueError(f"duplicate node id: {node.id}")
            node_ids.add(node.id)

        edge_ids: set[str] = set()
        for edge in self.edges:
            if edge.id in edge_ids:
                raise ValueError(f"duplicate edge id: {edge.id}")
            edge_ids.add(edge.id)
            for endpoint in (edge.source, edge.target):
                if endpoint not in node_ids:
                    raise ValueError(
                        f"edge {edge.id} references unknown node: {endpoint}"
                    )
        return self

    def get_node(self, node_id: str) -> RoadmapNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
