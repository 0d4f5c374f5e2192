from __future__ import annotations

from typing import TypedDict, Dict, Callable, Optional
from langgraph.graph import StateGraph, END

from agent.directives import compose_prompt
from agent.guidance import extract_line_count, resolve_target_length
from agent.schemas import Poem, PoemRequest
from agent.styles import resolve_style
from agent.termination import Decision, TerminationPolicy
from core.llm_service import LlmService
from core.logging_setup import setup_logger
from core.prompt_loader import load_prompts

SEPARATOR = "--------------------"

Transcript = Callable[[str], None]


class AgentState(TypedDict, total=False):
    request: PoemRequest
    poem: Poem
    target: int
    policy: TerminationPolicy
    decision: Decision
    transcript: Optional[Transcript]


def _emit(state: AgentState, text: str) -> None:
    transcript = state.get("transcript")
    if transcript is not None:
        transcript(text)


def _clean_title(raw: str) -> str:
    return raw.strip().replace('"', "")


def build_poem_graph(llm: LlmService, prompts: Dict[str, Dict[str, str]], logger):
    """
    title -> seed line -> (next line -> [judgment])* -> END

    Holds no per-run data: request, poem and policy all travel in the state,
    so one compiled graph can serve any number of runs.
    """

    async def generate_title(state: AgentState):
        req = state["request"]
        if req.title:
            title = req.title
        else:
            title = _clean_title(await llm.generate(compose_prompt("title", req, prompts=prompts)))
        logger.info(f"title_ready generated={req.title is None}")
        return {"poem": Poem(title=title, lines=[])}

    async def generate_seed_line(state: AgentState):
        req = state["request"]
        if req.seed_line:
            line = req.seed_line
        else:
            line = (await llm.generate(compose_prompt("seed_line", req, prompts=prompts))).strip()

        poem = state["poem"].model_copy(deep=True)
        poem.add_line(line)

        _emit(state, f"Title: {poem.title}")
        _emit(state, SEPARATOR)
        _emit(state, line)
        logger.info(f"seed_ready generated={req.seed_line is None} target={state['target']}")
        return {"poem": poem}

    async def generate_next_line(state: AgentState):
        req = state["request"]
        poem = state["poem"].model_copy(deep=True)
        index = len(poem.lines) + 1

        prompt = compose_prompt("next_line", req, poem, line_index=index, prompts=prompts)
        line = (await llm.generate(prompt)).strip()
        poem.add_line(line)
        _emit(state, line)

        decision = state["policy"].decide(len(poem.lines))
        logger.info(f"line_added index={index} decision={decision.value}")
        return {"poem": poem, "decision": decision}

    async def judge_completion(state: AgentState):
        poem = state["poem"]
        prompt = compose_prompt("judgment", state["request"], poem, prompts=prompts)
        answer = await llm.generate(prompt)
        policy = state["policy"]
        status = policy.record_judgment(answer)
        logger.info(f"judged lines={len(poem.lines)} status={status.value}")
        return {"policy": policy}

    def _room_left(state: AgentState) -> bool:
        return len(state["poem"].lines) < state["target"]

    def route_after_seed(state: AgentState) -> str:
        return "generate_next_line" if _room_left(state) else END

    def route_after_line(state: AgentState) -> str:
        decision = state["decision"]
        if decision is Decision.COMPLETE:
            return END
        if decision is Decision.JUDGE:
            return "judge_completion"
        return "generate_next_line" if _room_left(state) else END

    def route_after_judgment(state: AgentState) -> str:
        if state["policy"].is_complete:
            return END
        # a "no" at the ceiling is advisory only
        return "generate_next_line" if _room_left(state) else END

    g = StateGraph(AgentState)
    g.add_node("generate_title", generate_title)
    g.add_node("generate_seed_line", generate_seed_line)
    g.add_node("generate_next_line", generate_next_line)
    g.add_node("judge_completion", judge_completion)
    g.set_entry_point("generate_title")
    g.add_edge("generate_title", "generate_seed_line")
    g.add_conditional_edges(
        "generate_seed_line",
        route_after_seed,
        {"generate_next_line": "generate_next_line", END: END},
    )
    g.add_conditional_edges(
        "generate_next_line",
        route_after_line,
        {
            "generate_next_line": "generate_next_line",
            "judge_completion": "judge_completion",
            END: END,
        },
    )
    g.add_conditional_edges(
        "judge_completion",
        route_after_judgment,
        {"generate_next_line": "generate_next_line", END: END},
    )
    return g.compile()


def initial_state(req: PoemRequest, transcript: Optional[Transcript] = None) -> AgentState:
    rule = resolve_style(req.style)
    target = resolve_target_length(req.guidance, rule)
    policy = TerminationPolicy(
        target,
        guidance_target=extract_line_count(req.guidance),
        style_target=rule.target_lines,
    )
    return {"request": req, "target": target, "policy": policy, "transcript": transcript}


def recursion_limit_for(target: int) -> int:
    # title + seed, then at most a line and a judgment per remaining line
    return 2 * target + 10


async def compose_poem(
    llm: LlmService,
    req: PoemRequest,
    *,
    transcript: Optional[Transcript] = None,
    prompts: Optional[Dict[str, Dict[str, str]]] = None,
) -> Poem:
    """Run one composition to the end. Generation errors propagate."""
    logger = setup_logger()
    graph = build_poem_graph(llm, prompts or load_prompts(), logger)

    state = initial_state(req, transcript)
    logger.info(
        f"compose_start style={req.style or 'free verse'} target={state['target']} "
        f"guidance={'yes' if req.guidance else 'no'} persona={'yes' if req.user_bio else 'no'}"
    )

    result = await graph.ainvoke(
        state, config={"recursion_limit": recursion_limit_for(state["target"])}
    )
    poem: Poem = result["poem"]

    _emit(state, SEPARATOR)
    logger.info(f"compose_done lines={len(poem.lines)}")
    return poem
