from dataclasses import dataclass

# Title marker of tracks meant for viewers who can't hear dialogue / sound cues
CAPTION_MARKER = "(CC)"

# Appended to caption tracks whose language has no dub suffix
CAPTION_SUFFIX = ".cc"


@dataclass(frozen=True)
class SubtitleClassification:
    stream_index: int
    language: str
    caption: bool
    output_suffix: str
