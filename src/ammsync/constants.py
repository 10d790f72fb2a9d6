__all__ = (
    "CHECKPOINT_FILENAME",
    "DEFAULT_BLOCK_STEP",
    "LOG_REQUEST_WEIGHT",
    "POOL_DATA_REQUEST_WEIGHT",
)

# Width of the block window queried by a single eth_getLogs request while crawling a factory
DEFAULT_BLOCK_STEP = 100_000

# Throttle weights. Refreshing a pool issues several calls (token decimals + pool state), so it is
# charged more than a single log query.
LOG_REQUEST_WEIGHT = 1
POOL_DATA_REQUEST_WEIGHT = 4

CHECKPOINT_FILENAME = "pool_sync_checkpoint.json"
