"""Records the causal structure of one agent run for debugging and visualization.

The graph is purely observational: the orchestration never reads it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from ..agents.models import AgentRunResult
from ..core.logger import get_logger

logger = get_logger(__name__)

NodeType = Literal["user", "agent", "tool"]

_MERMAID_STYLES: Dict[str, str] = {
    "user": "fill:#e6f7ff,stroke:#1890ff",
    "agent": "fill:#f6ffed,stroke:#52c41a",
    "tool": "fill:#fff7e6,stroke:#fa8c16",
}


@dataclass
class GraphNode:
    id: int
    label: str
    type: NodeType
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphEdge:
    source: int
    target: int
    label: str = ""


class GraphGenerator:
    """Append-only recorder of user, agent and tool nodes for a single run."""

    def __init__(self) -> None:
        self.nodes: List[GraphNode] = []
        self.edges: List[GraphEdge] = []
        self._node_counter = 0

    def reset(self) -> None:
        """Clear the graph. Calling it on an empty graph is a no-op."""
        self.nodes = []
        self.edges = []
        self._node_counter = 0

    def _add_node(self, label: str, node_type: NodeType, payload: Dict[str, Any]) -> int:
        node_id = self._node_counter
        self._node_counter += 1
        self.nodes.append(GraphNode(id=node_id, label=label, type=node_type, payload=payload))
        return node_id

    def add_user_query_node(self, query: str) -> int:
        """Add the node of the user's query and return its id."""
        return self._add_node("User Query", "user", {"query": query})

    def add_agent_node(self, agent_name: str, response: Any = None) -> int:
        """Add an agent node and return its id."""
        return self._add_node(agent_name, "agent", {"response": response})

    def add_tool_node(self, tool_name: str, result: Any = None) -> int:
        """Add a tool node and return its id."""
        return self._add_node(tool_name, "tool", {"result": result})

    def add_edge(self, source_id: int, target_id: int, label: str = "") -> None:
        self.edges.append(GraphEdge(source=source_id, target=target_id, label=label))

    def process_agent_run(self, user_query: str, result: AgentRunResult, agent_name: str = "Generalist") -> None:
        """Record a finished run as user -> agent -> tool(s) -> agent.

        The graph is reset first, so it always describes the latest run only.
        """
        self.reset()

        user_node_id = self.add_user_query_node(user_query)
        agent_node_id = self.add_agent_node(agent_name, result.answer)
        self.add_edge(user_node_id, agent_node_id, "asks")

        for tool_result in result.tool_results:
            tool_node_id = self.add_tool_node(tool_result.tool_name, tool_result.payload)
            self.add_edge(agent_node_id, tool_node_id, "calls")
            self.add_edge(tool_node_id, agent_node_id, "returns")

        logger.debug(f"Recorded run graph with {len(self.nodes)} nodes and {len(self.edges)} edges.")

    def _find_node(self, node_id: int) -> Optional[GraphNode]:
        return next((node for node in self.nodes if node.id == node_id), None)

    def generate_text_graph(self) -> str:
        """Plain-text listing of nodes and edges."""
        lines = ["Graph Visualization:", "", "Nodes:"]
        lines.extend(f"- [{node.id}] {node.label} ({node.type})" for node in self.nodes)

        lines.extend(["", "Edges:"])
        for edge in self.edges:
            source = self._find_node(edge.source)
            target = self._find_node(edge.target)
            source_label = source.label if source else "?"
            target_label = target.label if target else "?"
            lines.append(
                f"- [{edge.source}] {source_label} --{edge.label or 'connects to'}--> [{edge.target}] {target_label}"
            )

        return "\n".join(lines) + "\n"

    def generate_mermaid_graph(self) -> str:
        """Mermaid flowchart definition of the graph."""
        lines = ["graph TD;"]
        for node in self.nodes:
            label = node.label.replace('"', "#quot;")
            lines.append(f'    {node.id}["{label}"]:::{node.type};')

        for edge in self.edges:
            if edge.label:
                lines.append(f'    {edge.source} -- "{edge.label}" --> {edge.target};')
            else:
                lines.append(f"    {edge.source} --> {edge.target};")

        for node_type, style in _MERMAID_STYLES.items():
            lines.append(f"    classDef {node_type} {style};")

        return "\n".join(lines) + "\n"
