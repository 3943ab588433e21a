from typing import List, TypedDict

from langchain_aws import ChatBedrockConverse
from langchain_core.messages import BaseMessage
from langchain_core.prompts import PromptTemplate

from app.catalog import fetch_products
from app.core.config import settings
from app.core.errors import InferenceError
from app.core.logger import get_logger
from app.core.models import Product

logger = get_logger(__name__)

NO_PRODUCTS = "No products are currently available."

PROMPT = PromptTemplate.from_template(
    "You are a helpful product assistant for an online store. "
    "Answer the customer's question based *only* on the product catalog below. "
    "If the information is not in the catalog, clearly state that you cannot find the answer. "
    "Be concise and do not make up information.\n\n"
    "CATALOG:\n{catalog}\n\n"
    "QUESTION: {query}\n\n"
    "ANSWER:"
)

_chat: ChatBedrockConverse | None = None


class State(TypedDict, total=False):
    """Per-request pipeline state."""

    query: str
    products: List[Product]
    prompt: str
    answer: str


def _get_chat() -> ChatBedrockConverse:
    """Lazily build the Bedrock chat model from settings.

    Returns:
        ChatBedrockConverse: Chat model bound to the configured model and region.
    """
    global _chat
    if _chat is None:
        logger.info(
            "Initializing Bedrock chat model %s in region %s",
            settings.BEDROCK_MODEL_ID,
            settings.AWS_REGION,
        )
        _chat = ChatBedrockConverse(
            model=settings.BEDROCK_MODEL_ID,
            region_name=settings.AWS_REGION,
            temperature=settings.BEDROCK_TEMPERATURE,
            max_tokens=settings.BEDROCK_MAX_TOKENS,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            aws_session_token=settings.AWS_SESSION_TOKEN,
        )
    return _chat


def format_catalog(products: List[Product]) -> str:
    """Render products as one prompt line each.

    Args:
        products (List[Product]): Catalog entries, in upstream order.

    Returns:
        str: Bullet list of at most ``PROMPT_MAX_PRODUCTS`` entries, or a fixed
            notice when the catalog is empty.
    """
    if not products:
        return NO_PRODUCTS

    lines = []
    for product in products[: settings.PROMPT_MAX_PRODUCTS]:
        line = f"- {product.name} (${product.price:.2f})"
        if product.description.strip():
            line += f": {product.description.strip()}"
        lines.append(line)

    if len(products) > settings.PROMPT_MAX_PRODUCTS:
        logger.debug(
            "Catalog truncated from %d to %d products", len(products), settings.PROMPT_MAX_PRODUCTS
        )
    return "\n".join(lines)


def build_prompt(query: str, products: List[Product]) -> str:
    """Assemble the model prompt for a query against the catalog."""
    return PROMPT.format(catalog=format_catalog(products), query=query.strip())


def _answer_text(response: BaseMessage) -> str:
    # Converse replies may carry a list of content blocks instead of a plain string
    content = response.content
    if isinstance(content, str):
        return content.strip()
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts).strip()


async def catalog_agent(state: State) -> State:
    """Load the product catalog into the pipeline state.

    Raises:
        ProductServiceError: Propagated from the catalog client.
    """
    logger.info("Starting catalog lookup")
    state["products"] = await fetch_products()
    return state


async def responder_agent(state: State) -> State:
    """Generate the final answer from the catalog and the user query.

    Args:
        state (State): Pipeline state holding ``query`` and ``products``.

    Returns:
        State: Updated state with ``prompt`` and ``answer``.

    Raises:
        InferenceError: If the model call fails or returns an empty answer.
    """
    logger.info("Generating response")
    products: List[Product] = state.get("products") or []
    prompt = build_prompt(state["query"], products)
    logger.debug("Prompt length: %d characters", len(prompt))

    try:
        response = await _get_chat().ainvoke(prompt)
    except Exception as e:
        raise InferenceError(f"Bedrock invocation failed: {e!r}") from e

    answer_text = _answer_text(response)
    if not answer_text:
        raise InferenceError("Bedrock returned an empty answer")

    logger.info("Generated response (%d chars): %s...", len(answer_text), answer_text[:120])

    state["prompt"] = prompt
    state["answer"] = answer_text
    return state
