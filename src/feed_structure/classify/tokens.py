"""NameTokenizer: splits feed tag and attribute names into lowercase words.

Marketplace feeds name the same concept many ways: ``categoryId``,
``category_id``, ``CATEGORY-ID``, ``g:product_type``, ``@vendorCode``.
Keyword classification matches against words, so names are tokenised
first:

- namespace prefixes and the ``@`` attribute marker are dropped
  ("g:price" -> ["price"], "@id" -> ["id"])
- snake_case, kebab-case and dotted separators split
- camelCase and PascalCase boundaries split ("vendorCode" -> ["vendor", "code"])
- acronym runs split before a capitalised word ("URLLink" -> ["url", "link"])
- letter/digit boundaries split ("image2" -> ["image", "2"])
"""

import re

# Matches snake_case, kebab-case, dotted and whitespace separators
_SEP = re.compile(r"[_\-.\s]+")

# camelCase boundary: lowercase letter followed by uppercase letter
_UPPER_LOWER = re.compile(r"([a-z])([A-Z])")

# Acronym run before a capitalised word: "URLLink" -> "URL Link"
_UPPER_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")

# Letter/digit boundaries.  Applied twice: each match consumes both
# characters, so "v2Config" only exposes its second boundary after the
# first substitution.
_DIGIT_BOUNDARY = re.compile(r"([^\W\d_])(\d)|(\d)([^\W\d_])")


class NameTokenizer:
    """Splits a node name into lowercase words.

    Example usage:
        tokenizer = NameTokenizer()
        tokenizer.tokenize("vendorCode")    # ["vendor", "code"]
        tokenizer.tokenize("@categoryId")   # ["category", "id"]
        tokenizer.tokenize("g:image_link")  # ["image", "link"]
    """

    def tokenize(self, name: str) -> list[str]:
        """Return the lowercase words of *name*, in order."""
        s = name.lstrip("@")
        _, _, local = s.rpartition(":")
        s = local or s

        s = _SEP.sub(" ", s)
        s = _UPPER_LOWER.sub(r"\1 \2", s)
        s = _UPPER_RUN.sub(r"\1 \2", s)
        s = _DIGIT_BOUNDARY.sub(r"\1\3 \2\4", s)
        s = _DIGIT_BOUNDARY.sub(r"\1\3 \2\4", s)
        return s.lower().split()
