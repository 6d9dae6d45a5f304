"""Console driver for the skill.

Runs one session against the local config: every input line is either a
platform intent name (``AMAZON.NextIntent``) or a short utterance (``next``,
``again``, ``stop``). The session starts with a launch request and ends on a
stop intent or end of input, at which point the profile is saved.
"""
from __future__ import annotations

import argparse
import os
import sys
import uuid
from pathlib import Path
from typing import Dict, Iterable, Sequence, TextIO

from spellcast.config.loader import load_app_config
from spellcast.config.models import AppConfig
from spellcast.core.enums import Platform
from spellcast.core.errors import ConfigurationError
from spellcast.runtime.profiles import ProfileStore
from spellcast.skill.models import DeviceInterface, SkillRequest, SkillResponse
from spellcast.skill.session import SessionManager
from spellcast.telemetry import configure_logging, default_storage
from spellcast.telemetry.analytics import AnalyticsTracker

UTTERANCES: Dict[str, str] = {
    "yes": "AMAZON.YesIntent",
    "cast": "AMAZON.YesIntent",
    "next": "AMAZON.NextIntent",
    "previous": "AMAZON.PreviousIntent",
    "back": "AMAZON.PreviousIntent",
    "again": "AMAZON.RepeatIntent",
    "repeat": "AMAZON.RepeatIntent",
    "start over": "AMAZON.StartOverIntent",
    "help": "AMAZON.HelpIntent",
    "no": "AMAZON.NoIntent",
    "stop": "AMAZON.StopIntent",
    "cancel": "AMAZON.CancelIntent",
}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spellcast", description="Play the spell-casting skill in a terminal.")
    parser.add_argument("--config-dir", type=Path, default=_default_config_dir())
    parser.add_argument("--platform", choices=[platform.value for platform in Platform], default=Platform.ALEXA.value)
    parser.add_argument("--user", default="console-user")
    parser.add_argument("--locale", default="en-US")
    parser.add_argument("--quiet", action="store_true", help="Do not mirror JSON logs to stderr")
    return parser.parse_args(argv)


def _default_config_dir() -> Path:
    env_path = os.environ.get("SPELLCAST_CONFIG_DIR")
    if env_path:
        return Path(env_path)
    return Path(__file__).resolve().parents[1] / "config"


def _load_config(config_dir: Path) -> AppConfig:
    try:
        return load_app_config(
            settings_path=config_dir / "skill.yml",
            content_path=config_dir / "content.yml",
        )
    except (FileNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config in {config_dir}: {exc}") from exc


def build_manager(config: AppConfig, *, base_dir: Path) -> tuple[SessionManager, AnalyticsTracker]:
    """Wire store, analytics and session manager from ``config``."""

    settings = config.settings
    store = ProfileStore(base_dir / settings.storage.data_dir / settings.storage.profiles_subdir)
    telemetry_root = (base_dir / settings.storage.data_dir).resolve()
    tracker = AnalyticsTracker(settings.telemetry.analytics, storage=default_storage(telemetry_root))
    return SessionManager(config, store, analytics=tracker), tracker


def run_console(
    manager: SessionManager,
    lines: Iterable[str],
    *,
    platform: Platform,
    user_id: str,
    locale: str,
    out: TextIO,
) -> None:
    session_id = str(uuid.uuid4())
    interfaces = frozenset({DeviceInterface.AUDIO})

    def _turn(intent: str) -> SkillResponse:
        request = SkillRequest(
            session_id=session_id,
            user_id=user_id,
            platform=platform,
            intent=intent,
            locale=locale,
            interfaces=interfaces,
        )
        response = manager.handle(request)
        _print_response(response, out)
        return response

    if _turn("LaunchIntent").end_session:
        return
    for raw in lines:
        text = raw.strip()
        if not text:
            continue
        if _turn(UTTERANCES.get(text.lower(), text)).end_session:
            return
    _turn("SessionEndedRequest")


def _print_response(response: SkillResponse, out: TextIO) -> None:
    if response.speech:
        print(response.speech, file=out)
    if response.card is not None:
        print(f"[card] {response.card.title}", file=out)
    if response.suggestions:
        print(f"[chips] {' | '.join(response.suggestions)}", file=out)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    config_dir: Path = args.config_dir
    config = _load_config(config_dir)
    base_dir = config_dir.resolve().parent
    logger = configure_logging(
        log_dir=base_dir / config.settings.telemetry.logs_dir,
        level=config.settings.telemetry.log_level,
        console=not args.quiet,
    )
    logger.info("Bootstrapping skill", extra=config.describe())

    manager, tracker = build_manager(config, base_dir=base_dir)
    try:
        run_console(
            manager,
            sys.stdin,
            platform=Platform(args.platform),
            user_id=args.user,
            locale=args.locale,
            out=sys.stdout,
        )
    except KeyboardInterrupt:  # pragma: no cover - manual exit
        logger.info("Interrupted by user")
    finally:
        manager.close_all()
        tracker.close()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
