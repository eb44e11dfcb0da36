"""
Table listing against the Glue Data Catalog.
"""

from typing import Any, Dict, Iterator, List, Optional

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..common.exceptions import CatalogError
from ..common.models.table_config import CatalogTable

logger = structlog.get_logger(__name__)


class GlueCatalogClient:
    """
    Lists the tables of a catalog database through the SearchTables API.

    The client is any object exposing boto3's ``search_tables`` call, normally
    ``GlueConnectionManager.glue_client``.
    """

    DATABASE_FILTER_KEY = "databaseName"

    def __init__(self, glue_client, catalog_id: Optional[str] = None,
                 page_size: Optional[int] = None):
        self.glue_client = glue_client
        self.catalog_id = catalog_id
        self.page_size = page_size
        self.logger = logger.bind(component="GlueCatalogClient")

    def _build_request(self, database_name: str, next_token: Optional[str]) -> Dict[str, Any]:
        request: Dict[str, Any] = {
            'Filters': [
                {'Key': self.DATABASE_FILTER_KEY, 'Value': database_name}
            ]
        }
        if self.catalog_id:
            request['CatalogId'] = self.catalog_id
        if self.page_size:
            request['MaxResults'] = self.page_size
        if next_token:
            request['NextToken'] = next_token
        return request

    def iter_pages(self, database_name: str) -> Iterator[List[Dict[str, Any]]]:
        """
        Yield the raw ``TableList`` of every SearchTables page.

        Pages are requested until the response carries no NextToken.
        """
        next_token = None
        page_number = 0
        while True:
            request = self._build_request(database_name, next_token)
            try:
                response = self.glue_client.search_tables(**request)
            except (ClientError, BotoCoreError) as e:
                self.logger.error("SearchTables call failed",
                                  database=database_name,
                                  page=page_number + 1,
                                  error=str(e))
                raise CatalogError(
                    f"Failed to search tables in database '{database_name}': {e}"
                ) from e

            page_number += 1
            table_list = response.get('TableList', [])
            self.logger.debug("Fetched page", database=database_name,
                              page=page_number, table_count=len(table_list))
            yield table_list

            next_token = response.get('NextToken')
            if not next_token:
                break

    def iter_tables(self, database_name: str) -> Iterator[CatalogTable]:
        """Yield tables lazily, page by page, in API order."""
        for table_list in self.iter_pages(database_name):
            for raw in table_list:
                try:
                    yield CatalogTable.from_glue(raw)
                except ValueError as e:
                    raise CatalogError(
                        f"Invalid table definition returned for database '{database_name}': {e}"
                    ) from e

    def search_tables(self, database_name: str) -> List[CatalogTable]:
        """
        Fetch every table of ``database_name`` across all pages.

        Args:
            database_name: Catalog database to list

        Returns:
            Tables in the order the catalog returned them
        """
        tables = list(self.iter_tables(database_name))
        self.logger.info("Listed tables", database=database_name, table_count=len(tables))
        return tables
