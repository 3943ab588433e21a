from fastapi import FastAPI, HTTPException, Query
from app.core.errors import InferenceError, ProductServiceError
from app.core.logger import get_logger
from app.core.models import QueryResult
from app.graph import agent_graph

logger = get_logger(__name__)

app = FastAPI(
    title="Product Query Service",
    description="A microservice that answers product questions from the live catalog",
    version="1.0.0",
)


@app.get("/health", summary="Health Check")
def health_check() -> dict[str, str]:
    """Check service health status.

    Returns:
        dict[str, str]: Status message indicating service is operational.
    """
    return {"status": "ok"}


@app.get("/query", response_model=QueryResult, summary="Answer a product question")
async def handle_query(
    q: str = Query(..., min_length=1, description="The user's question about the catalog."),
) -> QueryResult:
    """Answer a natural-language question using the product catalog.

    Args:
        q (str): User question.

    Returns:
        QueryResult: The original query and the generated answer.

    Raises:
        HTTPException: 422 for a blank query, 502 if product-service or Bedrock
            fails, 500 for anything else.
    """
    if not q.strip():
        raise HTTPException(status_code=422, detail="Query must not be blank.")

    logger.info("Received query: '%s'", q)

    try:
        final_state = await agent_graph.ainvoke({"query": q})
        return QueryResult(query=q, answer=final_state["answer"])

    except ProductServiceError as e:
        logger.error("Product service failure for query '%s': %s", q, e, exc_info=True)
        raise HTTPException(
            status_code=502, detail="The product catalog is currently unavailable."
        )
    except InferenceError as e:
        logger.error("Inference failure for query '%s': %s", q, e, exc_info=True)
        raise HTTPException(
            status_code=502, detail="The answer service is currently unavailable."
        )
    except Exception as e:
        logger.error("Error processing query '%s': %s", q, e, exc_info=True)
        raise HTTPException(
            status_code=500, detail="An internal error occurred while processing the query."
        )
