import tomllib
from pathlib import Path
from typing import Annotated

import tomlkit
from pydantic import (
    BaseModel,
    HttpUrl,
    NonNegativeInt,
    PlainSerializer,
    PositiveInt,
    WebsocketUrl,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from ammsync.constants import CHECKPOINT_FILENAME, DEFAULT_BLOCK_STEP
from ammsync.logging import logger
from ammsync.types.aliases import ChainId

CONFIG_DIR = Path.home() / ".config" / "ammsync"
CONFIG_FILE = CONFIG_DIR / "config.toml"


class SyncSettings(BaseModel):
    requests_per_second_limit: NonNegativeInt = 0
    # Serialize the path as a string, since TOML has no path type
    checkpoint_path: Annotated[
        Path,
        PlainSerializer(lambda path: str(path), return_type=str),
    ] = Path(CHECKPOINT_FILENAME)
    block_step: PositiveInt = DEFAULT_BLOCK_STEP


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AMMSYNC_", env_nested_delimiter="__")

    sync: SyncSettings = SyncSettings()
    rpc: Annotated[
        dict[
            ChainId,
            HttpUrl | WebsocketUrl | Path,
        ],
        PlainSerializer(
            lambda rpc: {str(chain_id): str(endpoint) for chain_id, endpoint in rpc.items()},
            return_type=dict[str, str],
        ),
    ] = {}

    @field_validator("rpc", mode="after")
    def validate_paths(
        cls,  # noqa: N805
        rpc_dict: dict[ChainId, HttpUrl | WebsocketUrl | Path],
    ) -> dict[ChainId, HttpUrl | WebsocketUrl | Path]:
        """
        Validate the endpoints.

        This will convert all file paths (IPC sockets) to an absolute reference, leaving HTTP and WS
        URLs as-is.
        """

        return {
            chain_id: endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint
            for chain_id, endpoint in rpc_dict.items()
        }


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(),
        ),
    )


if not CONFIG_DIR.exists():
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created a configuration directory at {CONFIG_DIR}.")

if CONFIG_FILE.exists():
    settings = load_config_from_file(CONFIG_FILE)
else:
    settings = Settings()
    save_config_to_file(settings)
    logger.info(f"Created a configuration file at {CONFIG_FILE}.")
