#!/usr/bin/env python3
"""
CryptoNoise CLI - Command-line front end for noise generation.
"""

import argparse
import logging
import sys

from cryptonoise.config import Config
from cryptonoise.core.entropy import is_system_entropy_available
from cryptonoise.core.generator import NoiseGenerator, NoiseParams
from cryptonoise.core.log import setup_logging
from cryptonoise.core.quality import UniformityTests

MASK = "•" * 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cryptonoise",
        description="CryptoNoise - secure noise generator for one-time secrets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # One masked noise value
  %(prog)s -r -n 5              # Five values, revealed
  %(prog)s -q -n 3              # Bare values for piping
  %(prog)s --test               # Uniformity test suite only
  %(prog)s --max-length 18 --save-config
        """
    )

    gen_group = parser.add_argument_group('Generation')
    gen_group.add_argument("-n", "--count", type=int, default=None,
                           help="Number of noise values (default: 1)")
    gen_group.add_argument("-r", "--reveal", action="store_true", default=None,
                           help="Show values instead of masking them")

    shape_group = parser.add_argument_group('Shape')
    shape_group.add_argument("--base-length", type=int,
                             help="Base sequence length (default: 64)")
    shape_group.add_argument("--symbol-ratio", type=float,
                             help="Share of symbol draws in the base (default: 0.7)")
    shape_group.add_argument("--min-length", type=int,
                             help="Shortest extracted value (default: 15)")
    shape_group.add_argument("--max-length", type=int,
                             help="Longest extracted value (default: 20)")

    test_group = parser.add_argument_group('Uniformity Tests')
    test_group.add_argument("--test", action="store_true",
                            help="Run the uniformity test suite (no generation)")
    test_group.add_argument("--samples", type=int, default=2000,
                            help="Noise samples for --test (default: 2000)")

    cfg_group = parser.add_argument_group('Configuration')
    cfg_group.add_argument("--config", metavar="FILE",
                           help="Config file (default: ~/.cryptonoise/config.json)")
    cfg_group.add_argument("--save-config", action="store_true",
                           help="Persist the effective settings")

    out_group = parser.add_argument_group('Output')
    out_group.add_argument("-q", "--quiet", action="store_true",
                           help="Quiet mode: bare values, one per line")
    out_group.add_argument("-v", "--verbose", action="store_true",
                           help="Debug logging")
    out_group.add_argument("--log-file", metavar="FILE",
                           help="Also write log records to FILE")

    return parser


def _apply_overrides(args, config: Config) -> None:
    """Push command-line values over the loaded config."""
    for key in ("base_length", "symbol_ratio", "min_length", "max_length"):
        value = getattr(args, key)
        if value is not None:
            config.set("generator", key, value)
    if args.count is not None:
        config.set("cli", "count", args.count)
    if args.reveal:
        config.set("cli", "reveal", True)


def _resolve_count(config: Config) -> int:
    """Effective number of values; checked before anything is saved."""
    count = config.get("cli", "count")
    if count is None:
        return 1
    count = int(count)
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    return count


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        setup_logging(logging.DEBUG, args.log_file)
    elif args.test or not args.quiet:
        setup_logging(logging.INFO, args.log_file)

    try:
        config = Config(args.config)
        _apply_overrides(args, config)
        params = NoiseParams.from_config(config)
        count = _resolve_count(config)

        if args.save_config:
            config.save()
            if not args.quiet:
                print(f"Config saved: {config.path}")

        if args.test:
            return _handle_test(args, params)

        return _handle_generation(args, config, params, count)

    except KeyboardInterrupt:
        print("\n\nUser interrupt", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1


def _handle_test(args, params: NoiseParams) -> int:
    """Handle --test command."""
    results = UniformityTests.run_all_tests(samples=args.samples, verbose=True, params=params)
    return 0 if results['passed'] == results['total'] else 1


def _handle_generation(args, config: Config, params: NoiseParams, count: int) -> int:
    """Handle normal noise generation."""
    reveal = args.quiet or bool(config.get("cli", "reveal"))

    if not args.quiet:
        print("=" * 60)
        print("CRYPTONOISE - SECURE NOISE GENERATOR")
        print("=" * 60)
        if not is_system_entropy_available():
            print("ERROR: System CSPRNG unavailable", file=sys.stderr)
            return 1
        print(f"Base: {params.base_length} chars "
              f"({params.symbol_count} symbols / {params.alpha_count} alphanumeric)")
        print(f"Window: {params.min_length}-{params.max_length} chars")
        print("-" * 60)

    generator = NoiseGenerator(params=params)
    noises = [generator.generate() for _ in range(count)]

    for noise in noises:
        if args.quiet:
            print(noise)
        elif reveal:
            print(f"  {noise}    ({len(noise)} chars)")
        else:
            print(f"  {MASK}    ({len(noise)} chars, use --reveal to show)")

    if not args.quiet:
        print("=" * 60)
        print("Source: System CSPRNG (urandom)")
        print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
