#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Batch Translation CLI

Usage:
    python batch_translate.py input.txt -o output.txt --endpoint http://localhost:8080/translate
    python batch_translate.py --show-stats
    python batch_translate.py --reset-stats
    python batch_translate.py --show-config --concurrency 3

Each non-empty line of the input file is one fragment. Lines already in the
target language are copied through unchanged.
"""

import sys
import asyncio
import argparse
from datetime import datetime
from pathlib import Path

from tqdm import tqdm

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from config.logging_config import get_logger, set_level
from textbatch.cache.kv_store import JsonFileStore
from textbatch.errors import ConfigurationError, PersistenceError
from textbatch.performance.speed_stats import TranslationStatsManager
from textbatch.providers.http_provider import HttpTranslationProvider
from textbatch.rendering import BufferRenderer
from textbatch.session import TranslationSession

logger = get_logger(__name__)


def format_duration(seconds: int) -> str:
    """Format an ETA in seconds"""
    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        return f"{seconds // 60}m{seconds % 60:02d}s"
    else:
        return f"{seconds // 3600}h{(seconds % 3600) // 60:02d}m"


def cmd_show_stats(args) -> int:
    """Print persisted speed history"""
    stats = TranslationStatsManager(JsonFileStore(settings.stats_file))
    stats.initialize()
    current = stats.get_stats()

    print("=" * 60)
    print("TRANSLATION SPEED HISTORY")
    print("=" * 60)
    print(f"Stats file:        {settings.stats_file}")
    print(f"Tasks measured:    {current.task_count}")
    print(f"Characters:        {current.total_characters}")
    print(f"Time:              {current.total_time_ms / 1000:.1f}s")
    print(f"Average speed:     {current.average_speed} chars/s")
    print(f"Unfinished tasks:  {stats.active_task_count}")
    updated = datetime.fromtimestamp(current.last_updated / 1000)
    print(f"Last updated:      {updated.strftime('%Y-%m-%d %H:%M:%S')}")
    return 0


def cmd_reset_stats(args) -> int:
    """Reset persisted speed history"""
    stats = TranslationStatsManager(JsonFileStore(settings.stats_file))
    stats.reset()
    print(f"Speed history reset ({settings.stats_file})")
    return 0


async def run_translation(args) -> int:
    """Translate one input file"""
    input_file = Path(args.input).resolve()
    if not input_file.exists():
        print(f"Input file not found: {input_file}")
        return 1

    endpoint = args.endpoint or settings.provider_endpoint
    try:
        provider = HttpTranslationProvider(
            endpoint,
            target_lang=settings.target_lang,
            api_key=settings.provider_api_key,
            timeout=settings.provider_request_timeout_sec,
            segment_mode=args.segments,
        )
    except ConfigurationError as e:
        print(f"{e}: pass --endpoint or set TEXTBATCH_PROVIDER_ENDPOINT")
        return 1

    output_file = Path(args.output).resolve() if args.output else input_file.with_name(
        f"{input_file.stem}_{settings.target_lang}{input_file.suffix}"
    )
    lines = input_file.read_text(encoding="utf-8").splitlines()

    renderer = BufferRenderer(settings)
    session = TranslationSession(
        settings,
        provider,
        renderer=renderer,
        context=args.context or input_file.stem,
    )

    for line_no, line in enumerate(lines):
        session.add_fragment(line, line_no)
    session.flush()

    progress_bar = tqdm(total=100, unit="%", desc="Translating", disable=args.quiet)

    def update_progress(status):
        progress_bar.n = round(status.progress_percentage, 1)
        progress_bar.set_postfix({
            'active': status.active,
            'pending': status.pending,
            'speed': f"{status.average_speed}c/s",
            'eta': format_duration(status.estimated_remaining_time_seconds),
        })
        progress_bar.refresh()

    session.monitor.add_callback(update_progress)
    session.monitor.start()
    try:
        await session.wait_idle()
    finally:
        await session.close()
        progress_bar.close()

    output = [renderer.render(line_no, line) for line_no, line in enumerate(lines)]
    output_file.write_text("\n".join(output) + "\n", encoding="utf-8")

    statistics = session.get_statistics()
    batcher_stats = statistics['batcher']
    print(f"\nOutput:            {output_file}")
    print(f"Groups completed:  {batcher_stats['completed_groups']}")
    print(f"Fragments applied: {batcher_stats['fragments_applied']}")
    print(f"Cache hits:        {batcher_stats['cache_hits']}")
    if batcher_stats['error_counts']:
        print("Errors:")
        for category, count in batcher_stats['error_counts'].items():
            print(f"  {category}: {count}")
    logger.debug(f"Final statistics: {statistics}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Batch text fragments and translate them through a rate-limited provider"
    )
    parser.add_argument('input', nargs='?', help='Input text file, one fragment per line')
    parser.add_argument('-o', '--output', help='Output file (default: <input>_<lang>.<ext>)')
    parser.add_argument('--endpoint', help='Provider endpoint URL')
    parser.add_argument('--context', help='Document context sent with every request')
    parser.add_argument('--target-lang', help='Target language code')
    parser.add_argument('--concurrency', type=int, help='Max concurrent provider calls')
    parser.add_argument('--batch-size', type=int, help='Max combined characters per group')
    parser.add_argument('--bilingual', action='store_true', help='Keep source text above translation')
    parser.add_argument('--segments', action='store_true', help='Send fragment lists instead of joined text')
    parser.add_argument('--show-stats', action='store_true', help='Show persisted speed history')
    parser.add_argument('--reset-stats', action='store_true', help='Reset persisted speed history')
    parser.add_argument('--show-config', action='store_true', help='Print effective configuration')
    parser.add_argument('--log-level', default=None, help='DEBUG, INFO, WARNING, ERROR')
    parser.add_argument('-q', '--quiet', action='store_true', help='No progress bar')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    set_level(args.log_level or settings.log_level)

    if args.target_lang:
        settings.target_lang = args.target_lang
    if args.concurrency:
        settings.max_concurrent_translations = args.concurrency
    if args.batch_size:
        settings.batch_max_size = args.batch_size
    if args.bilingual:
        settings.display_mode = 1

    if args.show_config:
        settings.print_config()
        return 0

    try:
        if args.reset_stats:
            return cmd_reset_stats(args)
        if args.show_stats:
            return cmd_show_stats(args)
    except PersistenceError as e:
        print(f"Speed history unavailable: {e}")
        return 1

    if not args.input:
        parser.print_help()
        return 1

    try:
        return asyncio.run(run_translation(args))
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
