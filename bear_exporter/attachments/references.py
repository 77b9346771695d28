from typing import Iterator

from .. import config
from ..models import AttachmentReference


class AttachmentReferences:
    """
    Lazy view over the attachment tags of one note's text.

    Iterating yields AttachmentReference values in order of appearance,
    duplicates included. Every iteration rescans the text, so the view can
    be walked more than once.
    """

    def __init__(self, text: str):
        self.text = text or ""

    def __iter__(self) -> Iterator[AttachmentReference]:
        for match in config.ATTACHMENT_PATTERN.finditer(self.text):
            yield AttachmentReference(kind=match.group(1), name=match.group(2))


def parse_references(text: str) -> AttachmentReferences:
    return AttachmentReferences(text)
