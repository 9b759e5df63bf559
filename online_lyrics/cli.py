"""
Command-line interface for online-lyrics.

This module implements the CLI using Click, providing single-track and
batch lookups against the registered lyrics providers.
rich-click is used for the output colors.

Commands:
    online-lyrics --title <t> [--artist <a>] [--album <b>]   Look up one track
    online-lyrics --batch <tracks.yaml> --output-dir <dir>   Look up many tracks

Options:
    --sub none|romaji|translation       Override the configured sub-lyrics mode
    --config <path>                     Use a specific config.yaml
    --log-dir <path>                    Also write log files to this directory

Usage:
    # Print merged lyrics to stdout
    online-lyrics --title "Lemon" --artist "米津玄師"

    # Save lyrics with the Chinese translation under each line
    online-lyrics --title "Lemon" --artist "米津玄師" --sub translation -o lemon.lrc

    # Batch mode
    online-lyrics --batch tracks.yaml --output-dir lyrics/ --log-dir logs/

Batch File Format:
    A YAML list of mappings. Only 'title' is required.

        - title: Lemon
          artist: 米津玄師
          album: STRAY SHEEP
        - title: 夜に駆ける
          artist: YOASOBI

Exit Codes:
    0: Lyrics found (every track, in batch mode)
    1: Configuration or input file error
    2: No lyrics found (for at least one track, in batch mode)
"""

import re
import sys
from pathlib import Path
from typing import Any, Optional

import rich_click as click
import yaml
from tqdm import tqdm

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "cli": [
        {
            "name": "Single Track",
            "options": ["--title", "--artist", "--album", "--output"],
        },
        {
            "name": "Batch Mode",
            "options": ["--batch", "--output-dir"],
        },
        {
            "name": "Lookup Options",
            "options": ["--sub", "--config"],
        },
        {
            "name": "Logging",
            "options": ["--log-dir", "--verbose"],
        },
        {
            "name": "Info",
            "options": ["--version", "--help"],
        },
    ],
}

from online_lyrics import __version__
from online_lyrics.core import (
    ConfigError,
    OnlineLyricsConfig,
    SubLyricsMode,
    get_logger,
    load_config,
    log_lyrics_failure,
    setup_logging,
    shutdown_logging,
)
from online_lyrics.matching.models import LyricsQuery
from online_lyrics.service import OnlineLyricsService


logger = get_logger(__name__)


# =============================================================================
# EXIT CODES
# =============================================================================

EXIT_CONFIG_ERROR = 1
EXIT_NO_LYRICS = 2

SUB_MODE_CHOICES = ["none", "romaji", "translation"]

# Characters not allowed in filenames on common filesystems
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
MAX_FILENAME_LENGTH = 100


@click.command()
@click.option(
    "--title",
    metavar="<title>",
    help="Track title to look up"
)
@click.option(
    "--artist",
    default="",
    metavar="<artist>",
    help="Track artist(s)"
)
@click.option(
    "--album",
    default="",
    metavar="<album>",
    help="Album name"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    metavar="<file.lrc>",
    help="Write lyrics to this file instead of stdout"
)
@click.option(
    "--batch",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    metavar="<tracks.yaml>",
    help="YAML list of tracks to look up"
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    metavar="<dir>",
    help="Directory for batch results (default: current directory)"
)
@click.option(
    "--sub",
    type=click.Choice(SUB_MODE_CHOICES, case_sensitive=False),
    help="Secondary lyrics merged under each line"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml if present)"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    metavar="<dir>",
    help="Write full, error and lyrics-failure logs here"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug output (candidate scores, requests)"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    title: Optional[str],
    artist: str,
    album: str,
    output: Optional[Path],
    batch: Optional[Path],
    output_dir: Optional[Path],
    sub: Optional[str],
    config_path: Optional[Path],
    log_dir: Optional[Path],
    verbose: bool,
    version: bool
) -> None:
    """
    online-lyrics: Find synced lyrics online and merge translations.

    Searches NetEase Cloud Music for the track, picks the best matching
    result and prints its LRC lyrics, optionally with the translated or
    romanized line under each original line.

    \b
    SINGLE TRACK:
        online-lyrics --title "Lemon" --artist "米津玄師"
        online-lyrics --title "Lemon" --sub translation -o lemon.lrc

    \b
    BATCH:
        online-lyrics --batch tracks.yaml --output-dir lyrics/
    """
    if version:
        click.echo(f"online-lyrics {__version__}")
        ctx.exit(0)

    if not title and not batch:
        click.echo(ctx.get_help())
        ctx.exit(0)

    if title and batch:
        raise click.UsageError("Cannot use both --title and --batch")

    if output and batch:
        raise click.UsageError("--output is for single lookups; use --output-dir with --batch")

    if output_dir and not batch:
        raise click.UsageError("--output-dir can only be used with --batch")

    try:
        setup_logging(log_dir, verbose=verbose)

        config = _load_configuration(config_path, sub)
        service = OnlineLyricsService(config)

        if batch:
            missing = _run_batch(service, batch, output_dir or Path.cwd())
            if missing:
                sys.exit(EXIT_NO_LYRICS)
        else:
            found = _run_single(service, title, artist, album, output)
            if not found:
                sys.exit(EXIT_NO_LYRICS)

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)

    finally:
        shutdown_logging()


def _load_configuration(config_path: Path | None, sub: str | None) -> OnlineLyricsConfig:
    """Load config.yaml and apply the --sub override."""
    config = load_config(config_path)
    if sub is not None:
        config = config.with_sub_lyrics_mode(SubLyricsMode.from_config_value(sub))
    logger.debug(f"Sub-lyrics mode: {config.sub_lyrics_mode.value}")
    return config


def _run_single(
    service: OnlineLyricsService,
    title: str,
    artist: str,
    album: str,
    output: Path | None
) -> bool:
    """
    Look up one track and print or save the result.

    Returns:
        True if lyrics were found.
    """
    lyrics = service.lookup(title, artist, album)
    if lyrics is None:
        log_lyrics_failure(logger, title, artist, album)
        return False

    if output is None:
        click.echo(lyrics)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(lyrics, encoding="utf-8")
        logger.info(f"Saved: {output}")
    return True


def _run_batch(service: OnlineLyricsService, batch_path: Path, output_dir: Path) -> int:
    """
    Look up every track of a batch file.

    Results are written to output_dir as NNN-<title>.lrc, where NNN is the
    track's 1-based position in the batch file.

    Returns:
        Number of tracks without lyrics.
    """
    tracks = load_batch_file(batch_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    found = 0
    missing = 0
    with tqdm(total=len(tracks), desc="Lyrics", unit="track") as pbar:
        for position, track in enumerate(tracks, start=1):
            lyrics = service.get_lyrics(track)
            if lyrics is None:
                log_lyrics_failure(logger, track.title, track.artist, track.album)
                missing += 1
            else:
                path = output_dir / batch_filename(position, track.title)
                path.write_text(lyrics, encoding="utf-8")
                found += 1
            pbar.update(1)

    logger.info(f"Batch complete: {found} found, {missing} missing")
    return missing


def load_batch_file(batch_path: Path) -> list[LyricsQuery]:
    """
    Read a batch file into lookup queries.

    Args:
        batch_path: YAML file containing a list of track mappings.

    Returns:
        One LyricsQuery per entry, in file order.

    Raises:
        ConfigError: If the file is not valid YAML, is not a list, or an
                     entry is not a mapping with a non-blank title.
    """
    try:
        with open(batch_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (IOError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Failed to read batch file: {e}",
            details={"file_path": str(batch_path), "original_error": str(e)}
        ) from e

    if raw is None:
        return []

    if not isinstance(raw, list):
        raise ConfigError(
            "Batch file must contain a YAML list of tracks",
            details={"file_path": str(batch_path)}
        )

    queries = []
    for index, entry in enumerate(raw, start=1):
        query = _query_from_entry(entry)
        if query is None:
            raise ConfigError(
                f"Batch entry #{index} must be a mapping with a 'title'",
                details={"file_path": str(batch_path), "entry": entry}
            )
        queries.append(query)
    return queries


def _query_from_entry(entry: Any) -> LyricsQuery | None:
    if not isinstance(entry, dict):
        return None
    return LyricsQuery.from_metadata(
        _as_text(entry.get("title")),
        _as_text(entry.get("artist")),
        _as_text(entry.get("album")),
    )


def _as_text(value: Any) -> str:
    # YAML turns titles like "1999" or "True" into non-strings
    if value is None:
        return ""
    return str(value)


def batch_filename(position: int, title: str) -> str:
    """
    Build the output filename for a batch result.

    Example:
        batch_filename(7, 'What/Is "Love"?') -> '007-What_Is _Love__.lrc'
    """
    name = INVALID_FILENAME_CHARS.sub("_", title).strip().strip(".")
    name = name[:MAX_FILENAME_LENGTH].rstrip() or "unknown"
    return f"{position:03d}-{name}.lrc"


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `online-lyrics` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
