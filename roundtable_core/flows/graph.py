"""LangGraph construction and node implementations."""

from __future__ import annotations

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from roundtable_core.agents.roundtable_agent import RoundtableAgent
from roundtable_core.agents.routing import classify_request
from roundtable_core.flows.state import RoundtableState
from roundtable_core.infrastructure.logging.logger import logger


def classify_node(state: RoundtableState) -> RoundtableState:
    mode = classify_request(state.get("message"), state.get("bot"))
    logger.info(
        "classify_node.end",
        extra={"extra": {
            "mode": mode,
            "bot": state.get("bot"),
            "conversation_length": len(state.get("conversation") or []),
        }},
    )
    return {"mode": mode}


def roundtable_node(state: RoundtableState, agent: RoundtableAgent) -> RoundtableState:
    replies = agent.reply_all(state["message"], state.get("conversation") or [], state.get("credentials") or {})
    logger.info("roundtable_node.end", extra={"extra": {"replies": len(replies)}})
    return {"replies": replies}


def single_turn_node(state: RoundtableState, agent: RoundtableAgent) -> RoundtableState:
    # the bot speaks purely from context, no new user message
    reply = agent.reply_for(state["bot"], "", state.get("conversation") or [], state.get("credentials") or {})
    logger.info("single_turn_node.end", extra={"extra": {"bot": reply.bot_display_name}})
    return {"replies": [reply]}


def mode_router(state: RoundtableState) -> str:
    return state.get("mode") or "invalid"


def build_graph(agent: RoundtableAgent) -> CompiledStateGraph:
    graph = StateGraph(RoundtableState)
    graph.add_node("classify", classify_node)
    graph.add_node("roundtable", lambda s: roundtable_node(s, agent))
    graph.add_node("single", lambda s: single_turn_node(s, agent))
    graph.set_entry_point("classify")
    graph.add_conditional_edges(
        "classify",
        mode_router,
        {"roundtable": "roundtable", "single": "single", "invalid": END},
    )
    graph.add_edge("roundtable", END)
    graph.add_edge("single", END)
    return graph.compile()
