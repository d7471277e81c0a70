"""Refresh signals and how they are raised.

GitHub webhook deliveries (already authenticated by whatever receives them),
process start-up and manual requests all end up here as one or more
RefreshSignal values. Refreshes rebuild whole collections; the payload is
only used to decide which collection to rebuild.
"""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any

from .cache.exceptions import CacheRefreshError
from .cache.store import ReleaseCacheStore
from .config import CacheConfig

logger = logging.getLogger(__name__)


class RefreshSignal(str, Enum):
    MAIN = "main"
    LEGACY = "legacy"
    PULL_REQUESTS = "pull-requests"


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def signals_for_event(
    event_name: str, payload: dict[str, Any], config: CacheConfig
) -> list[RefreshSignal]:
    """Work out which collections a webhook event invalidates.

    Args:
        event_name: Value of the ``X-GitHub-Event`` header
        payload: Decoded webhook body
        config: Configuration naming the main and legacy repositories

    Returns:
        Signals to raise, possibly empty

    Example:
        >>> signals_for_event(
        ...     "release",
        ...     {"action": "published", "release": {}, "repository": {"full_name": "PCSX2/pcsx2"}},
        ...     CacheConfig(),
        ... )
        [<RefreshSignal.MAIN: 'main'>]
    """
    action = payload.get("action")

    if event_name == "release":
        if action != "published" or "release" not in payload:
            return []
        full_name = (payload.get("repository") or {}).get("full_name", "")
        if full_name.lower() == config.main_repo.lower():
            return [RefreshSignal.MAIN]
        if full_name.lower() == config.legacy_repo.lower():
            return [RefreshSignal.LEGACY]
        return []

    if event_name == "check_suite":
        check_suite = payload.get("check_suite") or {}
        if (
            action == "completed"
            and check_suite.get("status") == "completed"
            and check_suite.get("conclusion") == "success"
        ):
            return [RefreshSignal.PULL_REQUESTS]

    return []


def dispatch(store: ReleaseCacheStore, signal: RefreshSignal, cid: str) -> bool:
    """Run the refresh for one signal.

    Returns:
        True if the refresh installed new data, False if it failed (the
        failure is logged and the cache keeps serving its previous data)
    """
    if signal is RefreshSignal.PULL_REQUESTS:
        return store.refresh_pull_requests(cid)

    try:
        if signal is RefreshSignal.MAIN:
            store.refresh_main(cid)
        else:
            store.refresh_legacy(cid)
    except CacheRefreshError as e:
        logger.error(f"[{cid}] {e}")
        return False
    except Exception:
        logger.exception(
            f"[{cid}] Error occurred when refreshing {signal.value} release cache"
        )
        return False
    return True


def refresh_all(
    store: ReleaseCacheStore,
    cid: str,
    signals: list[RefreshSignal] | None = None,
) -> dict[RefreshSignal, bool]:
    """Run several refreshes concurrently, one worker thread per signal.

    Args:
        store: Store to refresh
        cid: Correlation id shared by every refresh
        signals: Signals to run; defaults to every source

    Returns:
        Outcome of each refresh
    """
    signals = signals or list(RefreshSignal)
    logger.info(
        f"[{cid}] Refreshing {', '.join(signal.value for signal in signals)}"
    )

    with ThreadPoolExecutor(
        max_workers=len(signals), thread_name_prefix="refresh"
    ) as executor:
        futures = {
            signal: executor.submit(dispatch, store, signal, cid) for signal in signals
        }

    return {signal: future.result() for signal, future in futures.items()}
