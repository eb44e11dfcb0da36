# src/glue_catalog_docs/common/connections/glue_connection.py

from typing import Dict, Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
import structlog

logger = structlog.get_logger(__name__)


class GlueConnectionManager:
    """
    Connection manager for the AWS Glue Data Catalog.
    Handles boto3 session and client creation.
    Credentials are resolved by the standard AWS credential chain.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize Glue connection manager.

        Args:
            config: Configuration dictionary with connection parameters
        """
        self.config = config
        self.logger = logger.bind(component="GlueConnectionManager")

        self.region = config.get('region')
        self.profile = config.get('profile')
        self.endpoint_url = config.get('endpoint_url')

        self.client_config = Config(
            retries={'max_attempts': config.get('max_retries', 3)},
            connect_timeout=config.get('connect_timeout', 60),
            read_timeout=config.get('read_timeout', 300)
        )

        self._glue_client = None

        self.logger.debug("GlueConnectionManager initialized",
                          region=self.region,
                          profile=self.profile,
                          endpoint=self.endpoint_url)

    @property
    def glue_client(self):
        """Get or create Glue client."""
        if self._glue_client is None:
            self._glue_client = self._create_glue_client()
        return self._glue_client

    def _create_glue_client(self):
        """Create boto3 Glue client."""
        try:
            session = boto3.Session(profile_name=self.profile, region_name=self.region)

            client_params = {
                'service_name': 'glue',
                'config': self.client_config
            }
            if self.endpoint_url:
                client_params['endpoint_url'] = self.endpoint_url

            client = session.client(**client_params)

            self.logger.info("Glue client created successfully",
                             region=client.meta.region_name)
            return client

        except (BotoCoreError, ClientError) as e:
            self.logger.error("Failed to create Glue client", error=str(e))
            raise ConnectionError(f"Failed to create Glue client: {str(e)}") from e

    def close(self):
        """Drop the cached client."""
        self._glue_client = None
        self.logger.debug("Glue connection closed")
