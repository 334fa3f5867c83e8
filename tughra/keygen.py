"""
Random key material drawn from named Unicode ranges.

The catalog is read-only. `generate_key` takes an optional `random.Random`
so callers can pass a seeded generator and get a reproducible key.
"""
import random
from collections import Counter
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .errors import ConfigurationError


class UnicodeRange(NamedTuple):
    name: str
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, code_point) -> bool:
        return self.start <= code_point <= self.end


UNICODE_RANGES = (
    UnicodeRange("Numbers", 48, 57),
    UnicodeRange("Lowercase English", 97, 122),
    UnicodeRange("Uppercase English", 65, 90),
    UnicodeRange("Basic Latin", 33, 127),
    UnicodeRange("Latin-1 Supplement", 128, 255),
    UnicodeRange("Latin Extended-A", 256, 383),
    UnicodeRange("Latin Extended-B", 384, 591),
    UnicodeRange("IPA Extensions", 592, 687),
    UnicodeRange("Greek and Coptic", 880, 1023),
    UnicodeRange("Cyrillic", 1024, 1279),
    UnicodeRange("Arabic", 1536, 1791),
    UnicodeRange("Hebrew", 1424, 1535),
    UnicodeRange("Devanagari", 2304, 2431),
    UnicodeRange("Bengali", 2432, 2559),
    UnicodeRange("Gurmukhi", 2560, 2687),
    UnicodeRange("Gujarati", 2688, 2815),
    UnicodeRange("Oriya", 2816, 2943),
    UnicodeRange("Tamil", 2944, 3071),
    UnicodeRange("Telugu", 3072, 3199),
    UnicodeRange("Kannada", 3200, 3327),
    UnicodeRange("Malayalam", 3328, 3455),
    UnicodeRange("Thai", 3584, 3711),
    UnicodeRange("Lao", 3712, 3839),
    UnicodeRange("Tibetan", 3840, 4095),
    UnicodeRange("Georgian", 4256, 4351),
    UnicodeRange("Hangul Jamo", 4352, 4607),
    UnicodeRange("Latin Extended Additional", 7680, 7935),
    UnicodeRange("Greek Extended", 7936, 8191),
    UnicodeRange("General Punctuation", 8192, 8303),
    UnicodeRange("Superscripts and Subscripts", 8304, 8351),
    UnicodeRange("Currency Symbols", 8352, 8399),
    UnicodeRange("Combining Diacritical Marks", 8400, 8447),
    UnicodeRange("Letterlike Symbols", 8448, 8527),
    UnicodeRange("Number Forms", 8528, 8591),
    UnicodeRange("Arrows", 8592, 8703),
    UnicodeRange("Mathematical Operators", 8704, 8959),
    UnicodeRange("Miscellaneous Technical", 8960, 9215),
    UnicodeRange("Control Pictures", 9216, 9279),
    UnicodeRange("Optical Character Recognition", 9280, 9311),
    UnicodeRange("Enclosed Alphanumerics", 9312, 9471),
    UnicodeRange("Box Drawing", 9472, 9599),
    UnicodeRange("Block Elements", 9600, 9631),
    UnicodeRange("Geometric Shapes", 9632, 9727),
    UnicodeRange("Miscellaneous Symbols", 9728, 9983),
    UnicodeRange("Dingbats", 9984, 10175),
    UnicodeRange("Braille Patterns", 10240, 10495),
    UnicodeRange("CJK Symbols and Punctuation", 12288, 12351),
    UnicodeRange("Hiragana", 12352, 12447),
    UnicodeRange("Katakana", 12448, 12543),
    UnicodeRange("Bopomofo", 12544, 12591),
    UnicodeRange("Hangul Compatibility Jamo", 12592, 12687),
    UnicodeRange("Phonetic Extensions", 12704, 12735),
    UnicodeRange("Enclosed CJK Letters and Months", 12800, 13055),
    UnicodeRange("CJK Compatibility", 13056, 13311),
    UnicodeRange("CJK Unified Ideographs", 19968, 40959),
    UnicodeRange("Hangul Syllables", 44032, 55215),
    UnicodeRange("Private Use Area", 57344, 63743),
    UnicodeRange("CJK Compatibility Ideographs", 63744, 64255),
    UnicodeRange("Alphabetic Presentation Forms", 64256, 64335),
    UnicodeRange("Arabic Presentation Forms-A", 64336, 65023),
    UnicodeRange("Variation Selectors", 65024, 65039),
    UnicodeRange("Combining Half Marks", 65056, 65071),
    UnicodeRange("CJK Compatibility Forms", 65072, 65103),
    UnicodeRange("Small Form Variants", 65104, 65135),
    UnicodeRange("Arabic Presentation Forms-B", 65136, 65279),
    UnicodeRange("Halfwidth and Fullwidth Forms", 65280, 65519),
    UnicodeRange("Specials", 65520, 65535),
    UnicodeRange("Linear B Syllabary", 65536, 65663),
    UnicodeRange("Linear B Ideograms", 65664, 65791),
    UnicodeRange("Aegean Numbers", 65792, 65855),
    UnicodeRange("Ancient Greek Numbers", 65856, 65935),
    UnicodeRange("Ancient Symbols", 65936, 65999),
    UnicodeRange("Phaistos Disc", 66000, 66047),
    UnicodeRange("Lycian", 66176, 66207),
    UnicodeRange("Carian", 66208, 66271),
    UnicodeRange("Coptic Epact Numbers", 66272, 66303),
    UnicodeRange("Old Italic", 66304, 66351),
    UnicodeRange("Gothic", 66352, 66383),
    UnicodeRange("Old Permic", 66384, 66431),
    UnicodeRange("Ugaritic", 66432, 66463),
    UnicodeRange("Old Persian", 66464, 66527),
    UnicodeRange("Deseret", 66560, 66639),
    UnicodeRange("Shavian", 66640, 66687),
    UnicodeRange("Osmanya", 66688, 66735),
    UnicodeRange("Cypriot Syllabary", 67584, 67647),
    UnicodeRange("Imperial Aramaic", 67648, 67679),
    UnicodeRange("Phoenician", 67840, 67871),
    UnicodeRange("Lydian", 67872, 67903),
    UnicodeRange("Meroitic Hieroglyphs", 67968, 67999),
    UnicodeRange("Meroitic Cursive", 68000, 68095),
    UnicodeRange("Kharoshthi", 68096, 68191),
    UnicodeRange("Old South Arabian", 68192, 68223),
    UnicodeRange("Avestan", 68352, 68415),
    UnicodeRange("Inscriptional Parthian", 68416, 68447),
    UnicodeRange("Inscriptional Pahlavi", 68448, 68479),
    UnicodeRange("Old Turkic", 68480, 68511),
    UnicodeRange("Rumi Numeral Symbols", 68512, 68543),
    UnicodeRange("Brahmi", 69632, 69703),
    UnicodeRange("Kaithi", 69728, 69791),
    UnicodeRange("Sora Sompeng", 69840, 69863),
    UnicodeRange("Chakma", 69984, 70079),
    UnicodeRange("Sharada", 70080, 70143),
    UnicodeRange("Takri", 70144, 70239),
    UnicodeRange("Mahajani", 70240, 70271),
    UnicodeRange("Mandaic", 70272, 70335),
    UnicodeRange("Ahlat", 70336, 70383),
    UnicodeRange("Miao", 70384, 70431),
    UnicodeRange("Arabic Mathematical Alphabetic Symbols", 70464, 70495),
    UnicodeRange("CJK Compatibility Ideographs Extension A", 108224, 108455),
    UnicodeRange("CJK Compatibility Ideographs Extension B", 110576, 110751),
    UnicodeRange("CJK Compatibility Ideographs Extension C", 110752, 110855),
    UnicodeRange("CJK Compatibility Ideographs Extension D", 110856, 110879),
    UnicodeRange("CJK Compatibility Ideographs Extension E", 110880, 110999),
    UnicodeRange("CJK Compatibility Ideographs Extension F", 111040, 111411),)


def list_unicode_ranges() -> Sequence[UnicodeRange]:
    return UNICODE_RANGES


def find_range(name: str) -> UnicodeRange:
    for r in UNICODE_RANGES:
        if r.name == name:
            return r
    raise ConfigurationError(f"Invalid Unicode group name: {name}")


def parse_range_names(range_names: str) -> List[UnicodeRange]:
    """Resolve a comma-separated list of range names, ignoring blanks."""
    names = [n.strip() for n in range_names.split(",") if n.strip()]
    if not names:
        raise ConfigurationError("At least one Unicode group name is required.")
    return [find_range(n) for n in dict.fromkeys(names)]


def merge_ranges(ranges: Sequence[UnicodeRange]) -> List[Tuple[int, int]]:
    """Collapse ranges into sorted, disjoint (start, end) intervals."""
    merged = []
    for start, end in sorted((r.start, r.end) for r in ranges):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def generate_key(count: int, range_names: str, rng: Optional[random.Random] = None) -> str:
    """
    Return `count` characters drawn uniformly from the union of the named
    ranges. Overlapping ranges are merged first, so every code point in the
    union is equally likely.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ConfigurationError(f"Key length must be a non-negative integer, got {count!r}")
    intervals = merge_ranges(parse_range_names(range_names))
    if rng is None:
        rng = random.SystemRandom()

    total = sum(end - start + 1 for start, end in intervals)
    chars = []
    for _ in range(count):
        pick = rng.randrange(total)
        for start, end in intervals:
            size = end - start + 1
            if pick < size:
                chars.append(chr(start + pick))
                break
            pick -= size
    return "".join(chars)


def display_characters(name: str) -> str:
    """Every character of the named range, in code-point order."""
    r = find_range(name)
    return "".join(chr(cp) for cp in range(r.start, r.end + 1))


def detect_language(text: str) -> Optional[str]:
    """
    Name of the range holding most of the characters of `text`, or None.

    Each character counts toward the first catalog range that contains it;
    ties go to the range listed first.
    """
    counts = Counter()
    for c in text:
        cp = ord(c)
        for r in UNICODE_RANGES:
            if cp in r:
                counts[r.name] += 1
                break

    best, best_count = None, 0
    for r in UNICODE_RANGES:
        if counts[r.name] > best_count:
            best, best_count = r.name, counts[r.name]
    return best
