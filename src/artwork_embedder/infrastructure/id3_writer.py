"""ID3 tag writer backed by mutagen."""

from __future__ import annotations

from pathlib import Path

from mutagen.id3 import APIC, ID3, TALB, TIT2, TPE1, ID3NoHeaderError

from artwork_embedder.domain.models import TagSet
from artwork_embedder.domain.policies import DEFAULT_TAG_WRITE_OPTIONS, TagWriteOptions


def write_id3_tags(path: Path, tags: TagSet, options: TagWriteOptions = DEFAULT_TAG_WRITE_OPTIONS) -> bool:
    """Write text frames and front-cover artwork into ``path`` in place."""

    if options.replace_existing:
        id3 = ID3()
    else:
        try:
            id3 = ID3(str(path))
        except ID3NoHeaderError:
            id3 = ID3()

    for frame_cls, value in ((TPE1, tags.artist), (TIT2, tags.title), (TALB, tags.album)):
        id3.delall(frame_cls.__name__)
        if value or not options.skip_empty_text:
            id3.add(frame_cls(encoding=options.text_encoding, text=[value]))

    id3.delall("APIC")
    id3.add(
        APIC(
            encoding=options.text_encoding,
            mime=tags.artwork.mime_type,
            type=tags.picture_type,
            desc=tags.description,
            data=tags.artwork.data,
        )
    )
    id3.save(str(path), v2_version=options.id3_version)
    return True
