from langgraph.graph import StateGraph, END, START

from app.agents import State, catalog_agent, responder_agent
from app.core.logger import get_logger

logger = get_logger(__name__)


def _build_agent_graph():
    """Compile the catalog -> responder pipeline.

    No checkpointer is attached: every invocation starts from an empty state.
    """
    builder = StateGraph(State)

    builder.add_node("catalog", catalog_agent)
    builder.add_node("responder", responder_agent)

    builder.add_edge(START, "catalog")
    builder.add_edge("catalog", "responder")
    builder.add_edge("responder", END)

    return builder.compile()


agent_graph = _build_agent_graph()

logger.info("Query graph compiled with nodes: %s", ", ".join(agent_graph.get_graph().nodes))
