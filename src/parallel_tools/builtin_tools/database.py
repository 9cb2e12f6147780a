import asyncio
from datetime import datetime, timezone
from typing import Annotated, Any, Dict

from pydantic import Field

from ..core.logger import get_logger
from .latency import SIMULATED_LATENCY

logger = get_logger(__name__)

MOCK_DATABASE: Dict[str, Dict[str, Dict[str, Any]]] = {
    "users": {
        "user-123": {"id": "user-123", "name": "John Doe", "email": "john@example.com", "role": "admin"},
        "user-456": {"id": "user-456", "name": "Jane Smith", "email": "jane@example.com", "role": "user"},
    },
    "products": {
        "prod-789": {"id": "prod-789", "name": "Laptop", "price": 999.99, "category": "electronics"},
        "prod-101": {"id": "prod-101", "name": "Headphones", "price": 149.99, "category": "accessories"},
    },
    "orders": {
        "order-111": {"id": "order-111", "userId": "user-123", "productId": "prod-789", "status": "shipped"},
        "order-222": {"id": "order-222", "userId": "user-456", "productId": "prod-101", "status": "pending"},
    },
}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def database(
    entity_type: Annotated[str, Field(description="The type of entity to look up (users, products, orders)")],
    entity_id: Annotated[str, Field(description="The ID of the entity to look up, e.g. 'user-123'")],
) -> Dict[str, Any]:
    """Query a database for information. Specify the entity type and ID."""
    await asyncio.sleep(SIMULATED_LATENCY["database"])
    logger.debug(f"Database tool called for {entity_type}:{entity_id}")

    # Missing entities are answered with an error payload, not an exception
    table = MOCK_DATABASE.get(entity_type)
    if table is None:
        return {
            "error": f'Entity type "{entity_type}" not found in database',
            "availableTypes": list(MOCK_DATABASE.keys()),
            "timestamp": _timestamp(),
        }

    record = table.get(entity_id)
    if record is None:
        return {
            "error": f'{entity_type} with ID "{entity_id}" not found',
            "availableIds": list(table.keys()),
            "timestamp": _timestamp(),
        }

    return {"result": dict(record), "timestamp": _timestamp()}
