from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from .config import LocaleKitSettings, parse_locale_list
from .exceptions import LocaleKitError
from .logging import setup_logging
from .platform_locale import detect_platform_locale
from .resolver import LocaleResolver
from .translator import Translator


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="localekit",
        description="Look up translation strings and locale-specific asset paths.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    translate = subparsers.add_parser("translate", help="Translate a key")
    translate.add_argument("key", help="Lookup key")
    translate.add_argument("values", nargs="*", help="Substitution arguments")
    translate.add_argument(
        "--dict",
        dest="dictionary",
        required=True,
        help="Dictionary JSON file or URL (top-level keys are locale codes)",
    )
    translate.add_argument("--locale", help="Locale or comma separated locale chain, e.g. fr-CA,fr")
    translate.add_argument("--fallback", help="Fallback locale")

    asset = subparsers.add_parser("asset", help="Resolve a locale-specific asset path")
    asset.add_argument("path", help="Base asset path or URL")
    asset.add_argument("--locale", help="Locale or comma separated locale chain")
    asset.add_argument("--fallback", help="Fallback locale")
    asset.add_argument("--base-url", default=None, help="Base URL for relative asset paths")
    asset.add_argument("--separator", default=None, help="Separator placed before the locale code")

    detect = subparsers.add_parser("detect", help="Print the detected locale chain")
    detect.add_argument(
        "--no-country",
        action="store_true",
        help="Only use the two letter language code",
    )
    return parser.parse_args(argv)


async def _translate(args: argparse.Namespace, settings: LocaleKitSettings) -> str:
    async with Translator.from_settings(settings) as translator:
        await translator.load(args.dictionary)
        translator.resolver.configure(
            locale=parse_locale_list(args.locale) or translator.locale or detect_platform_locale(),
            fallback_locale=args.fallback,
        )
        return translator.translate(args.key, *args.values)


async def _asset(args: argparse.Namespace, settings: LocaleKitSettings) -> str:
    async with Translator(
        base_url=args.base_url or settings.base_url,
        timeout=settings.timeout,
        file_separator=args.separator or settings.file_separator,
    ) as translator:
        translator.resolver.configure(
            locale=parse_locale_list(args.locale) or settings.locale,
            fallback_locale=args.fallback or settings.fallback_locale,
        )
        return await translator.resolve_asset_path_async(args.path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = LocaleKitSettings.from_env()
    setup_logging(settings, verbose=args.verbose)

    try:
        if args.command == "translate":
            output = asyncio.run(_translate(args, settings))
        elif args.command == "asset":
            output = asyncio.run(_asset(args, settings))
        else:
            resolver = LocaleResolver()
            chain = resolver.auto_detect(use_country_locale=not args.no_country)
            output = chain if isinstance(chain, str) else ",".join(chain)
    except LocaleKitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(output)
    return 0
