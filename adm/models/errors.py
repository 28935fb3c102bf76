"""
Construction-time errors raised by attribute validation.
"""


class AttributeValidationError(ValueError):
    """Raised when an attribute is constructed from invalid field values."""

    def __init__(self, attribute_type: str, message: str) -> None:
        self.attribute_type = attribute_type
        self.message = message
        super().__init__(f"{attribute_type}: {message}")


class InvalidSpanError(AttributeValidationError):
    """Offsets do not describe a range with 0 <= start <= end."""

    def __init__(self, attribute_type: str, start_offset, end_offset) -> None:
        self.start_offset = start_offset
        self.end_offset = end_offset
        super().__init__(
            attribute_type,
            f"invalid span [{start_offset}, {end_offset}) (need 0 <= start <= end)",
        )


class InvalidHeadMentionIndexError(AttributeValidationError):
    """head_mention_index does not point into the mention list."""

    def __init__(self, attribute_type: str, index, mention_count: int) -> None:
        self.index = index
        self.mention_count = mention_count
        super().__init__(
            attribute_type,
            f"head mention index {index!r} out of range for {mention_count} mention(s)",
        )
