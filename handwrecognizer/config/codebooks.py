import string
from dataclasses import dataclass, field
from typing import Dict, List

SENTINEL_CHAR = "?"

# Glyph tables, position == class index
ASCII81_CHARS = " !\"#&'()*+,-./" + string.digits + ":;?" + string.ascii_uppercase + "[]" + string.ascii_lowercase
BASIC41_CHARS = " " + string.digits + string.ascii_lowercase + ".,?!"


@dataclass(frozen=True)
class Codebook:
    """Maps class indices of the classifier output to displayable characters."""
    name: str
    index_to_char: Dict[int, str] = field(default_factory=dict)
    sentinel: str = SENTINEL_CHAR

    @staticmethod
    def from_chars(name: str, chars: str) -> "Codebook":
        """Creates a codebook whose i-th character is the glyph for class i.

        Args:
            name (str): Name of the codebook.
            chars (str): The glyphs in class index order.

        Returns:
            Codebook: The codebook.
        """
        return Codebook(name, {i: c for i, c in enumerate(chars)})

    def lookup(self, index: int) -> str:
        return self.index_to_char.get(index, self.sentinel)

    def decode(self, indices: List[int]) -> str:
        return "".join([self.lookup(i) for i in indices])

    def is_total(self, num_classes: int) -> bool:
        """Checks that every index in [0, num_classes) has a glyph."""
        return all(i in self.index_to_char for i in range(num_classes))

    def __len__(self) -> int:
        return len(self.index_to_char)


BUILTIN_CODEBOOKS = {
    "ascii81": Codebook.from_chars("ascii81", ASCII81_CHARS),
    "basic41": Codebook.from_chars("basic41", BASIC41_CHARS),
}


def get_codebook(name_or_chars: str) -> Codebook:
    """Resolves a codebook by name. Anything that is not a built-in name is used as an explicit glyph table.

    Args:
        name_or_chars (str): Either "ascii81", "basic41" or a string of glyphs in class index order.

    Returns:
        Codebook: The resolved codebook.
    """
    if name_or_chars in BUILTIN_CODEBOOKS:
        return BUILTIN_CODEBOOKS[name_or_chars]
    return Codebook.from_chars("custom", name_or_chars)
