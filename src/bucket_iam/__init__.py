from .bucket import Bucket
from .client import Storage
from .exceptions import (
    ApiError,
    BucketIamError,
    InvalidArgumentError,
    InvalidResponseError,
    TransportError,
)
from .iam import Iam
from .logging_config import configure_logging
from .models import (
    Binding,
    Expr,
    GetPolicyOptions,
    PermissionResult,
    Policy,
    RequestOptions,
)
from .request import RequestDescriptor, RequestExecutor, arrify, encode_query
from .transport import HttpExecutor

__all__ = [
    # Models
    "Binding",
    "Expr",
    "GetPolicyOptions",
    "PermissionResult",
    "Policy",
    "RequestOptions",
    "RequestDescriptor",
    # Clients
    "Bucket",
    "HttpExecutor",
    "Iam",
    "RequestExecutor",
    "Storage",
    # Functions
    "arrify",
    "configure_logging",
    "encode_query",
    # Exceptions
    "ApiError",
    "BucketIamError",
    "InvalidArgumentError",
    "InvalidResponseError",
    "TransportError",
]

__version__ = "0.1.0"
