"""
Knuth-Morris-Pratt substring search
"""

from typing import List

from algorithms.errors import InvalidArgumentError


class KMP:
    """
    Exact substring search in linear time.
    A fresh jump table is built for every search.
    """

    NOT_FOUND = -1

    @staticmethod
    def check_arguments(pattern: str, text: str) -> None:
        """
        Validate search arguments.

        Raises:
            InvalidArgumentError: If pattern or text is missing, empty,
                or the pattern is longer than the text
        """
        if pattern is None or text is None:
            raise InvalidArgumentError("Text and/or pattern is None")
        if not isinstance(pattern, str) or not isinstance(text, str):
            raise InvalidArgumentError("Text and pattern must be strings")
        if not pattern or not text:
            raise InvalidArgumentError("Empty pattern and/or text")
        if len(pattern) > len(text):
            raise InvalidArgumentError(
                f"Pattern longer than text ({len(pattern)} > {len(text)})"
            )

    @staticmethod
    def jump_table(pattern: str) -> List[int]:
        """
        Build the failure table for the pattern.

        Entry i holds the length of the longest proper prefix of the
        pattern that is also a suffix of pattern[:i]. Entry 0 is -1.

        Args:
            pattern: Non-empty search pattern

        Returns:
            List of len(pattern) + 1 fallback positions
        """
        table = [0] * (len(pattern) + 1)
        table[0] = -1

        prefix_length = 0
        i = 1
        while i < len(pattern):
            if pattern[prefix_length] == pattern[i]:
                prefix_length += 1
                i += 1
                table[i] = prefix_length
            elif prefix_length > 0:
                prefix_length = table[prefix_length]
            else:
                i += 1
                table[i] = 0

        return table

    @staticmethod
    def search(pattern: str, text: str) -> int:
        """
        Find the first occurrence of pattern in text.

        Invalid arguments are reported as NOT_FOUND, never raised.

        Args:
            pattern: Substring to look for
            text: Text to search in

        Returns:
            Start index of the leftmost match, or NOT_FOUND
        """
        try:
            KMP.check_arguments(pattern, text)
        except InvalidArgumentError:
            return KMP.NOT_FOUND

        table = KMP.jump_table(pattern)
        pattern_length = len(pattern)
        text_length = len(text)
        t = 0
        p = 0

        while t < text_length:
            if pattern[p] == text[t]:
                p += 1
                t += 1
                if p == pattern_length:
                    return t - p
            else:
                p = table[p]
                # -1 only comes from entry 0
                if p < 0:
                    t += 1
                    p += 1

        return KMP.NOT_FOUND
