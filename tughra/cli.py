import sys
import argparse

from . import __version__
from .alphabet import DEFAULT_CHARSET
from .engine import CipherEngine, DECRYPT, ENCRYPT
from .errors import TughraError
from .keygen import detect_language, generate_key, list_unicode_ranges
from .log import log_warn, set_verbose
from .stats import calculate_stats, file_to_data_uri, format_size
from .variants import DEFAULT_VARIANT, VARIANT_REGISTRY

DEFAULT_RANGES = "Lowercase English,Uppercase English,Numbers"


def list_variants():
    """Print all available variants."""
    print("\nAvailable Variants:")
    print("=" * 72)
    for name, cls in VARIANT_REGISTRY.items():
        flags = []
        if cls.requires_key:
            flags.append("key")
        if cls.involution:
            flags.append("self-inverse")
        if cls.cycle_insensitive:
            flags.append("1 cycle")
        print(f"  {name:<17} [{', '.join(flags) or '---':<22}] {cls.description}")
    print("=" * 72)
    print(f"\nTotal: {len(VARIANT_REGISTRY)} variant(s) registered.")


def list_ranges():
    for r in list_unicode_ranges():
        print(f"  {r.name:<42} U+{r.start:04X}..U+{r.end:04X}")


def print_stats(text: str):
    stats = calculate_stats(text)
    script = detect_language(text) or "unknown"
    print(f"[STATS] {stats['characters']} chars, {stats['words']} words, "
          f"{stats['lines']} lines, {format_size(stats['size'])}, script: {script}",
          file=sys.stderr)


def write_stdout(text: str):
    """Print `text`, letting lone surrogates through as UTF-8 bytes."""
    sys.stdout.flush()
    sys.stdout.buffer.write((text + "\n").encode("utf-8", "surrogatepass"))
    sys.stdout.buffer.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tughra",
        description="Tughra text obfuscation engine (cycles + base-N wrapping)",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    method_help = "\n".join(f"  {k:<17}: {v.description}" for k, v in VARIANT_REGISTRY.items())
    parser.add_argument("-a", "--algorithm", choices=list(VARIANT_REGISTRY.keys()),
                        default=DEFAULT_VARIANT, metavar="NAME",
                        help=f"Select variant (default: {DEFAULT_VARIANT}).\n{method_help}")

    # Main action group
    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-e", "--encrypt", action="store_true", help="Encrypt mode")
    action_group.add_argument("-d", "--decrypt", action="store_true", help="Decrypt mode")
    action_group.add_argument("-l", "--list", action="store_true", help="List all available variants")
    action_group.add_argument("--list-ranges", action="store_true", help="List Unicode ranges for key generation")
    action_group.add_argument("--gen-key", type=int, metavar="N",
                              help="Print a random key of N characters")

    parser.add_argument("-k", "--key", default="", help="Encryption key")
    parser.add_argument("-c", "--cycles", type=int, default=1, metavar="N",
                        help="Number of transform cycles (default: 1)")
    parser.add_argument("--ranges", default=DEFAULT_RANGES, metavar="NAMES",
                        help=f"Comma-separated Unicode ranges for --gen-key\n(default: {DEFAULT_RANGES})")

    # Base encoding options
    parser.add_argument("-b", "--base", action="store_true",
                        help="Wrap the output in base-N encoding (unwrap on decrypt)")
    parser.add_argument("--charset", default=DEFAULT_CHARSET, metavar="SYMBOLS",
                        help="Alphabet for base-N encoding (default: Base64 symbols plus '=')")
    parser.add_argument("--ecc-symbols", type=int, default=0, metavar="N",
                        help="Reed-Solomon ECC symbols for base-wrapped output (default: 0, off)")

    # Affine parameters
    parser.add_argument("--affine-a", type=int, default=5, metavar="A",
                        help="Affine multiplier, coprime to 26 (default: 5)")
    parser.add_argument("--affine-b", type=int, default=8, metavar="B",
                        help="Affine offset (default: 8)")

    parser.add_argument("-s", "--stats", action="store_true",
                        help="Print size, word and line counts of the result to stderr")

    # Verbose output
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")

    # I/O options
    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")
    io_group.add_argument("-f", "--file", help="Input file of any type, read as a base64 data URI")

    parser.add_argument("-o", "--output", help="Output file path")
    return parser


def read_source(args) -> str:
    if args.text is not None:
        return args.text
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
    if args.file:
        try:
            return file_to_data_uri(args.file)
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.file}' not found.")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    print("[TUGHRA] Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:")
    try:
        return sys.stdin.read()
    except KeyboardInterrupt:
        sys.exit(0)


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    if args.list:
        list_variants()
        return 0
    if args.list_ranges:
        list_ranges()
        return 0
    if args.gen_key is not None:
        try:
            write_stdout(generate_key(args.gen_key, args.ranges))
        except TughraError as e:
            sys.exit(f"Key Error: {e}")
        return 0

    if args.ecc_symbols and not args.base:
        log_warn("ECC only applies to base-wrapped output. Ignoring --ecc-symbols.")

    mode = ENCRYPT if args.encrypt else DECRYPT
    label = "Encode Error" if args.encrypt else f"Decode Error ({args.algorithm})"

    try:
        engine = CipherEngine(mode, args.charset, args.algorithm, args.key, args.base,
                              affine_a=args.affine_a, affine_b=args.affine_b,
                              ecc_symbols=args.ecc_symbols if args.base else 0)
    except TughraError as e:
        sys.exit(f"Configuration Error: {e}")

    source_text = read_source(args)

    try:
        result = engine.process(source_text, args.cycles)
    except TughraError as e:
        sys.exit(f"{label}: {e}")

    if args.stats:
        print_stats(result)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8", errors="surrogatepass") as f:
                f.write(result)
                if args.decrypt: f.write("\n")
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        write_stdout(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
