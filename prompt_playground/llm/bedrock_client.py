"""
AWS Bedrock provider implementation.

Provides Claude model access through the Bedrock runtime service.
"""

import os
import json
from typing import Any, Optional

from .base import (
    NO_CONTENT_OUTPUT,
    AuthenticationError,
    GenerationParams,
    GenerationProvider,
    RequestError,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Lazy import boto3 to avoid import errors if not installed
boto3 = None
Config = None
ClientError = None
BotoCoreError = None


def _import_boto3():
    """Lazy import boto3 and related modules."""
    global boto3, Config, ClientError, BotoCoreError
    if boto3 is None:
        import boto3 as _boto3
        from botocore.config import Config as _Config
        from botocore.exceptions import ClientError as _ClientError, BotoCoreError as _BotoCoreError
        boto3 = _boto3
        Config = _Config
        ClientError = _ClientError
        BotoCoreError = _BotoCoreError


class BedrockClient(GenerationProvider):
    """
    AWS Bedrock provider for Claude models.

    Supports authentication via:
    1. Bearer token (AWS_BEARER_TOKEN_BEDROCK)
    2. Access key + secret (AWS_ACCESS_KEY_ID + AWS_SECRET_ACCESS_KEY)
    3. Default AWS credential chain (IAM role, SSO, etc.)

    When ``model_id`` is set it replaces the model named in the request
    parameters, since playground configs usually name a Gemini model.
    """

    DEFAULT_MODEL = "anthropic.claude-sonnet-4-20250514-v1:0"

    def __init__(
        self,
        model_id: Optional[str] = None,
        region: Optional[str] = None,
        timeout: int = 60,
        runtime_client: Any = None,
    ):
        """
        Initialize the Bedrock client.

        Args:
            model_id: Bedrock model id (default: from BEDROCK_MODEL env or DEFAULT_MODEL)
            region: AWS region (default: from AWS_REGION env or us-east-1)
            timeout: Read timeout in seconds
            runtime_client: Pre-built bedrock-runtime client (skips credential lookup)
        """
        self.model_id = model_id or os.getenv("BEDROCK_MODEL", self.DEFAULT_MODEL)
        self.region = region or os.getenv("AWS_REGION", "us-east-1")
        self.timeout = timeout
        self._client = runtime_client

    @property
    def provider_name(self) -> str:
        return "bedrock"

    @property
    def client(self):
        """Lazy-load Bedrock runtime client."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _has_credentials(self) -> bool:
        if os.getenv("AWS_BEARER_TOKEN_BEDROCK"):
            return True
        if os.getenv("AWS_ACCESS_KEY_ID") and os.getenv("AWS_SECRET_ACCESS_KEY"):
            return True
        _import_boto3()
        return boto3.Session(region_name=self.region).get_credentials() is not None

    def _create_client(self):
        """
        Create a Bedrock Runtime client with proper authentication.

        Raises:
            AuthenticationError: If no credential source is available
        """
        if not self._has_credentials():
            raise AuthenticationError(
                "AWS credentials not found. Set AWS_BEARER_TOKEN_BEDROCK or configure the AWS credential chain.",
                provider=self.provider_name,
            )

        _import_boto3()

        # No retries: each failure is surfaced once
        boto_config = Config(
            connect_timeout=30,
            read_timeout=self.timeout,
            retries={'total_max_attempts': 1}
        )

        bearer_token = os.getenv("AWS_BEARER_TOKEN_BEDROCK")
        access_key = os.getenv("AWS_ACCESS_KEY_ID")
        secret_key = os.getenv("AWS_SECRET_ACCESS_KEY")

        if bearer_token:
            logger.debug("Using bearer token authentication")
            return boto3.client(
                "bedrock-runtime",
                region_name=self.region,
                aws_access_key_id="",
                aws_secret_access_key="",
                aws_session_token=bearer_token,
                config=boto_config,
            )

        if access_key and secret_key:
            logger.debug("Using access key authentication")
            return boto3.client(
                "bedrock-runtime",
                region_name=self.region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                config=boto_config,
            )

        logger.debug("Using default AWS credential chain")
        return boto3.client(
            "bedrock-runtime",
            region_name=self.region,
            config=boto_config
        )

    def generate(self, prompt: str, params: GenerationParams) -> str:
        """
        Generate text from Claude via Bedrock.

        Args:
            prompt: The composed prompt
            params: Sampling parameters (``params.model`` is ignored)

        Returns:
            Generated text, or NO_CONTENT_OUTPUT

        Raises:
            AuthenticationError: If no AWS credential is configured
            RequestError: On AWS or parse failure
        """
        client = self.client

        request_body = {
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": params.max_output_tokens,
            "temperature": params.temperature,
            "messages": [
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        }

        if params.stop_sequences:
            request_body["stop_sequences"] = list(params.stop_sequences)

        logger.debug(f"Invoking model {self.model_id} (temperature={params.temperature})")

        _import_boto3()
        try:
            response = client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(request_body)
            )
            response_body = json.loads(response["body"].read())

        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            error_message = e.response.get('Error', {}).get('Message', str(e))
            status = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            raise RequestError(
                f"AWS error ({error_code}): {error_message}",
                provider=self.provider_name,
                status_code=status,
            ) from e

        except BotoCoreError as e:
            raise RequestError(f"AWS connection error: {e}", provider=self.provider_name) from e

        except json.JSONDecodeError as e:
            raise RequestError(f"Failed to parse response: {e}", provider=self.provider_name) from e

        content = response_body.get("content") or []
        if not content:
            return NO_CONTENT_OUTPUT

        return content[0].get("text") or NO_CONTENT_OUTPUT

    def is_available(self) -> bool:
        """Check whether an AWS credential source is configured."""
        if self._client is not None:
            return True
        try:
            return self._has_credentials()
        except ImportError:
            logger.warning("boto3 is not installed")
            return False
