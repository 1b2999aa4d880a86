"""crosspost: publish one article to many platforms.

Validates an article once, shapes it for each selected destination and
reports an ordered success/skipped/failed outcome per destination.
"""

__version__ = "0.1.0"

from crosspost.content import ContentPayload, PublishRequest
from crosspost.errors import AdapterError, InternalFault, UnknownDestination, ValidationError
from crosspost.registry import Destination, DestinationDescriptor, all_keys, describe
from crosspost.publisher import OutcomeStatus, PublishOrchestrator, PublishOutcome, publish_to_platforms
from crosspost.config import load_config, PublisherConfig
from crosspost.factory import build_adapters, build_orchestrator

__all__ = [
    "ContentPayload",
    "PublishRequest",
    "AdapterError",
    "InternalFault",
    "UnknownDestination",
    "ValidationError",
    "Destination",
    "DestinationDescriptor",
    "all_keys",
    "describe",
    "OutcomeStatus",
    "PublishOrchestrator",
    "PublishOutcome",
    "publish_to_platforms",
    "load_config",
    "PublisherConfig",
    "build_adapters",
    "build_orchestrator",
]
