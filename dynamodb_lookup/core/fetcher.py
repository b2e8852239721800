"""
Single-Item Fetcher

DynamoDB Operation: GetItem by primary key, one request per call.

Outcomes:
- Found(item): the store returned a non-empty item
- NotFound: the store answered successfully without an item
- ValidationError: malformed input, raised before any request is sent
- StoreError: the store reported a failure; never retried here
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..models import Found, ItemLookup, LookupResult, NotFound
from ..utils import build_projection_expression
from .client import DynamoDBClient

logger = logging.getLogger(__name__)


class ItemFetcher:
    """
    Looks up single items by primary key.

    Stateless apart from the shared client handle, which the caller owns
    and closes. Safe to call from several threads at once.
    """

    def __init__(self, client: DynamoDBClient):
        self.client = client

    def fetch(
        self,
        table_name: str,
        key: Dict[str, Any],
        projection: Optional[List[str]] = None,
        *,
        consistent_read: bool = False,
        timeout: Optional[float] = None
    ) -> LookupResult:
        """
        Fetch one item by primary key.

        Args:
            table_name: Table to read from
            key: Primary key attribute names to values, e.g. {'Name': 'World'}
            projection: Attribute names to return, in order. None returns all.
            consistent_read: Request a strongly consistent read
            timeout: Deadline in seconds for the whole call. A single attempt
                is made, without the configured retries.

        Returns:
            Found with the item exactly as the store returned it, or NotFound

        Raises:
            ValidationError: If the input is malformed (no request is sent)
            StoreError: If the store reports a failure
        """
        lookup = self._build_lookup(table_name, key, projection, consistent_read, timeout)

        proj_expr, expr_names = build_projection_expression(lookup.projection)
        item = self.client.get_item(
            table_name=lookup.table_name,
            key=lookup.key,
            projection_expression=proj_expr,
            expression_attribute_names=expr_names,
            consistent_read=lookup.consistent_read,
            timeout=lookup.timeout
        )

        if not item:
            logger.debug(f"No item in {lookup.table_name} for key {lookup.key}")
            return NotFound(table_name=lookup.table_name, key=lookup.key)

        return Found(item=item)

    @staticmethod
    def _build_lookup(table_name, key, projection, consistent_read, timeout) -> ItemLookup:
        try:
            return ItemLookup(
                table_name=table_name,
                key=key,
                projection=projection,
                consistent_read=consistent_read,
                timeout=timeout
            )
        except PydanticValidationError as e:
            errors = {
                '.'.join(str(part) for part in error['loc']) or 'lookup': error['msg']
                for error in e.errors()
            }
            logger.debug(f"Rejected lookup on {table_name!r}: {errors}")
            summary = "; ".join(f"{field}: {message}" for field, message in errors.items())
            raise ValidationError(f"Invalid lookup: {summary}", errors=errors, original_error=e) from e
