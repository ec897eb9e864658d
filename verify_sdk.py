import asyncio
import logging
import os
import sys

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("verify_sdk")

try:
    from pinecone_rest import Client, FetchRequest, PineconeError, QueryRequest
    logger.info("Successfully imported pinecone_rest package.")
except ImportError as e:
    logger.error(f"Failed to import pinecone_rest: {e}")
    sys.exit(1)


async def verify_index(index_name: str):
    logger.info(f"Verifying index {index_name} (credentials from PINECONE_API_KEY / PINECONE_ENV)...")
    async with await Client.from_env() as client:
        logger.info(f"Connected to project {client.client_info.project_name}")
        logger.info(f"Indexes: {await client.list_indexes()}")

        index = client.index(index_name)
        desc = await index.describe()
        logger.info(f"{index.url()}: dimension={desc.database.dimension} state={desc.status.state}")

        stats = await index.describe_stats()
        logger.info(f"{stats.total_vector_count} vectors in {len(stats.namespaces)} namespace(s)")

        namespace = next(iter(stats.namespaces), "")
        probe = [0.0] * desc.database.dimension
        probe[0] = 1.0
        result = await index.query(QueryRequest(vector=probe, top_k=3, namespace=namespace))
        logger.info(f"Query matches: {[(m.id, round(m.score, 4)) for m in result.matches]}")

        if result.matches:
            fetched = await index.fetch(FetchRequest(ids=[m.id for m in result.matches], namespace=namespace))
            logger.info(f"Fetched {len(fetched.vectors)} vector(s)")


def main():
    index_name = os.environ.get("PINECONE_INDEX_NAME") or (sys.argv[1] if len(sys.argv) > 1 else None)
    if not index_name:
        logger.error("Usage: verify_sdk.py <index-name> (or set PINECONE_INDEX_NAME)")
        sys.exit(2)
    try:
        asyncio.run(verify_index(index_name))
    except PineconeError as e:
        logger.error(f"Verification failed: {e}")
        sys.exit(1)
    logger.info("All checks passed.")


if __name__ == "__main__":
    main()
