"""AWS client management (DynamoDB table + S3 client).

Mirrors the usual backing-service pattern: when STORAGE_BACKEND=aws, the
boto3 resources are created once per process at import time; when it is
"memory" (local dev, tests), everything here is None and the service
falls back to in-memory stores.

Creating boto3 clients is cheap but not free (endpoint resolution,
credential chain lookup).  Under Lambda the module stays loaded between
invocations of a warm execution environment, so module-level clients are
reused instead of rebuilt for every request.  They hold no per-request
state.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import boto3

from certgen.core.config import SETTINGS

logger = logging.getLogger(__name__)


if SETTINGS.storage_backend == "aws":
    _dynamodb = boto3.resource(
        "dynamodb",
        region_name=SETTINGS.aws_region,
        endpoint_url=SETTINGS.dynamodb_endpoint_url,
    )
    certificates_table = _dynamodb.Table(SETTINGS.table_name)
    s3_client = boto3.client(
        "s3",
        region_name=SETTINGS.aws_region,
        endpoint_url=SETTINGS.s3_endpoint_url,
    )
else:
    certificates_table = None
    s3_client = None


@asynccontextmanager
async def lifespan_aws():
    """Startup/shutdown hook for the AWS clients.

    boto3 clients need no explicit shutdown; this only records which
    backend the process is running against.
    """
    if certificates_table is None:
        logger.info("STORAGE_BACKEND=memory: using in-memory certificate stores")
        yield
        return

    logger.info(
        "AWS storage: table=%s bucket=%s region=%s",
        SETTINGS.table_name,
        SETTINGS.bucket_name,
        SETTINGS.aws_region or "default",
    )
    yield
