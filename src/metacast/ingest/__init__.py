"""Conference ingestion: fetching, parsing and storing talks."""

from metacast.ingest.client import ContentClient
from metacast.ingest.durations import fill_durations, probe_duration
from metacast.ingest.pipeline import ConferencePipeline, IngestReport, period_folder
from metacast.ingest.speakers import SpeakerResolver, parse_author
from metacast.ingest.state import IngestState, advance, skip

__all__ = [
    "ContentClient",
    "ConferencePipeline",
    "IngestReport",
    "IngestState",
    "SpeakerResolver",
    "advance",
    "skip",
    "parse_author",
    "period_folder",
    "probe_duration",
    "fill_durations",
]
