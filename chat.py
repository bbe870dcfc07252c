import argparse
import asyncio
import logging

from dependency_injector import providers  # type: ignore[import-not-found]

from lan_chat.constants import CONFIG_FILE, PREFERENCES_FILE
from lan_chat.container import SyncAppContainer
from lan_chat.repositories import ConfigRepository

logger = logging.getLogger(__name__)


def build_container(
    config_file: str = CONFIG_FILE,
    server_url: str | None = None,
    preferences_file: str = PREFERENCES_FILE,
) -> SyncAppContainer:
    settings = ConfigRepository(config_file).load_settings(server_url)
    logger.debug("Loaded settings: %s", settings)
    container = SyncAppContainer()
    container.settings.override(providers.Object(settings))
    container.preferences_path.override(providers.Object(preferences_file))
    return container


async def run_app(container: SyncAppContainer) -> None:
    engine = container.sync_engine()
    view = container.view()
    container.controller().bind()
    engine.start()
    try:
        await view.run_async()
    finally:
        await engine.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LAN chat terminal client")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument(
        "--server", default=None, help="Server base URL, overrides the config file."
    )
    parser.add_argument("--preferences", default=PREFERENCES_FILE)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        filename=args.log_file,
    )
    container = build_container(args.config, args.server, args.preferences)
    print(f"Connecting to: {container.settings().server_url}")
    try:
        asyncio.run(run_app(container))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
