"""
Resumable Batch Generation.

BatchRunner walks the syllable deck in order and produces one clip per
syllable:

    for each syllable:
        file exists and not overwrite  -> record item, no request, no wait
        otherwise                      -> pace, synthesize, write, record item

Requests are strictly sequential; the pacer keeps successive request
starts at least ``request_interval_ms`` apart. Any GenerationError or
OSError propagates immediately and the remaining syllables are not
attempted. The runner never writes the manifest: the caller does that
after run() returns, so an aborted run leaves no manifest behind.

Example:
    config = load_run_config(os.environ)
    with SupertoneClient(config) as client:
        manifest = BatchRunner(config, client).run(enumerate_syllables())
    write_manifest(config, manifest.items, manifest.total)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from hangul_tts.core.config import RunConfig
from hangul_tts.core.errors import GenerationError
from hangul_tts.core.logging import fail, get_logger, info, success, verbose
from hangul_tts.tts.manifest import GenerationItem, Manifest, build_manifest
from hangul_tts.tts.pacing import RequestPacer
from hangul_tts.tts.storage import audio_exists, audio_file_name, ensure_output_dir, public_path, write_audio
from hangul_tts.tts.syllables import Syllable
from hangul_tts.utils.timeit import timeit

if TYPE_CHECKING:
    from hangul_tts.tts.client import SupertoneClient

_LOG = get_logger("hangul-tts.batch")

ACTION_SKIP = "skip"
ACTION_GENERATE = "generate"


@dataclass
class BatchStats:
    """Counters for one run."""
    generated: int = 0
    skipped: int = 0
    total: int = 0


class BatchRunner:
    """
    Generates audio for a syllable sequence, resuming past existing files.

    Attributes:
        config: The run configuration.
        client: Synthesis client (anything with ``synthesize(text)``); only
            plan() works without one.
        pacer: Request pacer; built from the config when not given.
        items: Items recorded so far, in enumeration order.
        stats: Generated/skipped counters.
    """

    def __init__(
        self,
        config: RunConfig,
        client: Optional["SupertoneClient"] = None,
        pacer: Optional[RequestPacer] = None,
    ):
        self.config = config
        self.client = client
        self.pacer = pacer or RequestPacer(config.request_interval_ms)
        self.items: List[GenerationItem] = []
        self.stats = BatchStats()

    def _item(self, syllable: Syllable, duration: Optional[float] = None) -> GenerationItem:
        file_name = audio_file_name(syllable.order, self.config.extension)
        return GenerationItem(
            id=syllable.id,
            character=syllable.character,
            order=syllable.order,
            file_name=file_name,
            path=public_path(self.config.public_base_path, file_name),
            audio_length_seconds=duration,
        )

    def _should_skip(self, file_name: str) -> bool:
        return not self.config.overwrite and audio_exists(self.config.output_dir, file_name)

    def plan(self, syllables: Sequence[Syllable]) -> List[Tuple[GenerationItem, str]]:
        """
        Report what run() would do without touching the network.

        Returns:
            (item, action) pairs, action being "skip" or "generate".
        """
        planned = []
        for syllable in syllables:
            item = self._item(syllable)
            action = ACTION_SKIP if self._should_skip(item.file_name) else ACTION_GENERATE
            planned.append((item, action))
        return planned

    def run(self, syllables: Sequence[Syllable]) -> Manifest:
        """
        Process every syllable in order.

        Returns:
            The in-memory Manifest for this run (not yet written).

        Raises:
            GenerationError: A synthesis call failed; later syllables are
                not attempted.
            OSError: Writing a clip failed.
        """
        if self.client is None:
            raise ValueError("BatchRunner.run() requires a synthesis client")

        self.stats = BatchStats(total=len(syllables))
        self.items = []

        info(_LOG, "run_start", total=len(syllables), output_dir=self.config.output_dir,
             overwrite=self.config.overwrite)
        ensure_output_dir(self.config.output_dir)

        for syllable in syllables:
            file_name = audio_file_name(syllable.order, self.config.extension)

            if self._should_skip(file_name):
                self.items.append(self._item(syllable))
                self.stats.skipped += 1
                verbose(_LOG, "skip_existing", order=syllable.order, character=syllable.character, file=file_name)
                continue

            waited = self.pacer.wait()
            if waited > 0:
                verbose(_LOG, "pacing_wait", seconds=round(waited, 3))

            info(_LOG, "synth_start", order=syllable.order, character=syllable.character)
            try:
                with timeit("synthesis") as t:
                    result = self.client.synthesize(syllable.character)
            except GenerationError as e:
                fail(_LOG, "synth_failed", order=syllable.order, character=syllable.character,
                     code=e.code, error=e.message)
                raise

            write_audio(self.config.output_dir, file_name, result.audio_bytes)
            self.items.append(self._item(syllable, result.audio_length_seconds))
            self.stats.generated += 1
            info(_LOG, "synth_done", order=syllable.order, file=file_name,
                 bytes=len(result.audio_bytes), seconds=round(t.seconds, 3))

        success(_LOG, "run_done", generated=self.stats.generated, skipped=self.stats.skipped,
                total=self.stats.total)
        return build_manifest(self.config, self.items, self.stats.total)
