"""
Porter stemmer.

Implements the suffix-stripping algorithm of M.F. Porter (1980) as distributed
in his reference C/Java implementation (which includes the ``bli -> ble`` and
``logi -> log`` departures from the paper).

Each call works on its own growable character buffer. Every buffer access is
bounds-checked; if a guard ever trips, the word is returned unchanged instead
of propagating the error to the indexer.
"""

import logging

logger = logging.getLogger(__name__)


class StemmingError(Exception):
    """Internal buffer state the algorithm cannot continue from."""


class _StemBuffer:
    """
    Working state for stemming a single word.

    b[0..k] is the word being stemmed. j is the cut position recorded by
    ends(): after a successful ends(s), b[0..j] is the stem before s.
    """

    def __init__(self, word: str) -> None:
        self.b: list[str] = list(word)
        self.k = len(word) - 1
        self.j = 0

    def result(self) -> str:
        return "".join(self.b[: self.k + 1])

    def char(self, i: int) -> str:
        if i < 0 or i >= len(self.b):
            raise StemmingError(f"index {i} outside buffer of length {len(self.b)}")
        return self.b[i]

    def cons(self, i: int) -> bool:
        """True if b[i] is a consonant."""
        ch = self.char(i)
        if ch in "aeiou":
            return False
        if ch == "y":
            return True if i == 0 else not self.cons(i - 1)
        return True

    def measure(self) -> int:
        """
        Count consonant sequences between 0 and j. With C a consonant run and
        V a vowel run, every word is [C](VC){m}[V]; this returns m.
        """
        n = 0
        i = 0
        j = self.j
        while True:
            if i > j:
                return n
            if not self.cons(i):
                break
            i += 1
        i += 1
        while True:
            while True:
                if i > j:
                    return n
                if self.cons(i):
                    break
                i += 1
            i += 1
            n += 1
            while True:
                if i > j:
                    return n
                if not self.cons(i):
                    break
                i += 1
            i += 1

    def vowel_in_stem(self) -> bool:
        return any(not self.cons(i) for i in range(self.j + 1))

    def double_consonant(self, i: int) -> bool:
        if i < 1:
            return False
        if self.char(i) != self.char(i - 1):
            return False
        return self.cons(i)

    def cvc(self, i: int) -> bool:
        """
        True if i-2,i-1,i is consonant-vowel-consonant and the final consonant
        is not w, x or y. Used to restore an 'e' at the end of a short word
        (cav(e), lov(e), hop(e)) but not snow, box, tray.
        """
        if i < 2 or not self.cons(i) or self.cons(i - 1) or not self.cons(i - 2):
            return False
        return self.char(i) not in "wxy"

    def ends(self, suffix: str) -> bool:
        length = len(suffix)
        start = self.k - length + 1
        if start < 0:
            return False
        for offset, ch in enumerate(suffix):
            if self.char(start + offset) != ch:
                return False
        self.j = self.k - length
        return True

    def set_to(self, replacement: str) -> None:
        """Replace b[j+1..k] with replacement, growing the buffer if needed."""
        if self.j + 1 < 0:
            raise StemmingError(f"cut position {self.j} before start of buffer")
        self.b[self.j + 1 :] = list(replacement)
        self.k = self.j + len(replacement)

    def replace(self, replacement: str) -> None:
        if self.measure() > 0:
            self.set_to(replacement)

    def step1ab(self) -> None:
        """
        Remove plurals and -ed or -ing.

            caresses -> caress    ponies -> poni    cats -> cat
            feed -> feed          agreed -> agree   plastered -> plaster
            motoring -> motor     hopping -> hop    filing -> file
        """
        if self.char(self.k) == "s":
            if self.ends("sses"):
                self.k -= 2
            elif self.ends("ies"):
                self.set_to("i")
            elif self.char(self.k - 1) != "s":
                self.k -= 1
        if self.ends("eed"):
            if self.measure() > 0:
                self.k -= 1
        elif (self.ends("ed") or self.ends("ing")) and self.vowel_in_stem():
            self.k = self.j
            if self.ends("at"):
                self.set_to("ate")
            elif self.ends("bl"):
                self.set_to("ble")
            elif self.ends("iz"):
                self.set_to("ize")
            elif self.double_consonant(self.k):
                self.k -= 1
                if self.char(self.k) in "lsz":
                    self.k += 1
            elif self.measure() == 1 and self.cvc(self.k):
                self.set_to("e")

    def step1c(self) -> None:
        """Turn terminal y to i when there is another vowel in the stem."""
        if self.ends("y") and self.vowel_in_stem():
            self.b[self.k] = "i"

    _STEP2_RULES = {
        "a": (("ational", "ate"), ("tional", "tion")),
        "c": (("enci", "ence"), ("anci", "ance")),
        "e": (("izer", "ize"),),
        "l": (("bli", "ble"), ("alli", "al"), ("entli", "ent"), ("eli", "e"), ("ousli", "ous")),
        "o": (("ization", "ize"), ("ation", "ate"), ("ator", "ate")),
        "s": (("alism", "al"), ("iveness", "ive"), ("fulness", "ful"), ("ousness", "ous")),
        "t": (("aliti", "al"), ("iviti", "ive"), ("biliti", "ble")),
        "g": (("logi", "log"),),
    }

    _STEP3_RULES = {
        "e": (("icate", "ic"), ("ative", ""), ("alize", "al")),
        "i": (("iciti", "ic"),),
        "l": (("ical", "ic"), ("ful", "")),
        "s": (("ness", ""),),
    }

    _STEP4_SUFFIXES = {
        "a": ("al",),
        "c": ("ance", "ence"),
        "e": ("er",),
        "i": ("ic",),
        "l": ("able", "ible"),
        "n": ("ant", "ement", "ment", "ent"),
        "o": ("ion", "ou"),
        "s": ("ism",),
        "t": ("ate", "iti"),
        "u": ("ous",),
        "v": ("ive",),
        "z": ("ize",),
    }

    def _apply_first(self, rules: tuple[tuple[str, str], ...]) -> None:
        # Only the first matching suffix is considered, whether or not the
        # measure condition then allows the replacement.
        for suffix, replacement in rules:
            if self.ends(suffix):
                self.replace(replacement)
                return

    def step2(self) -> None:
        """Map double suffixes to single ones: -ization -> -ize, -ational -> -ate, ..."""
        if self.k < 1:
            return
        self._apply_first(self._STEP2_RULES.get(self.char(self.k - 1), ()))

    def step3(self) -> None:
        """Deal with -ic-, -full, -ness etc."""
        if self.k < 1:
            return
        self._apply_first(self._STEP3_RULES.get(self.char(self.k), ()))

    def step4(self) -> None:
        """Take off -ant, -ence etc. in context <c>vcvc<v>."""
        if self.k < 1:
            return
        for suffix in self._STEP4_SUFFIXES.get(self.char(self.k - 1), ()):
            if suffix == "ion":
                if self.ends("ion") and self.j >= 0 and self.char(self.j) in "st":
                    break
            elif self.ends(suffix):
                break
        else:
            return
        if self.measure() > 1:
            self.k = self.j

    def step5(self) -> None:
        """Remove a final -e if m > 1, and change -ll to -l if m > 1."""
        if self.k < 1:
            return
        self.j = self.k
        if self.char(self.k) == "e":
            m = self.measure()
            if m > 1 or (m == 1 and not self.cvc(self.k - 1)):
                self.k -= 1
        if self.char(self.k) == "l" and self.double_consonant(self.k) and self.measure() > 1:
            self.k -= 1


class PorterStemmer:
    """
    Stateless Porter stemmer.

    stem() is total: words of two letters or fewer, empty strings and
    non-ASCII input come back unchanged, and so does any word whose
    processing trips an internal guard. Input is expected in lowercase.
    """

    def stem(self, word: str) -> str:
        if not word or len(word) <= 2 or not word.isascii():
            return word
        buf = _StemBuffer(word)
        try:
            buf.step1ab()
            buf.step1c()
            buf.step2()
            buf.step3()
            buf.step4()
            buf.step5()
        except StemmingError as e:
            logger.debug("Stemming failed for %r, keeping it unstemmed: %s", word, e)
            return word
        return buf.result()

    def __call__(self, word: str) -> str:
        return self.stem(word)


_STEMMER = PorterStemmer()


def stem_token(word: str) -> str:
    """Return the Porter stem of word."""
    return _STEMMER.stem(word)


def stem_tokens(tokens: list[str]) -> list[str]:
    """Stem a list of tokens."""
    return [_STEMMER.stem(t) for t in tokens]
