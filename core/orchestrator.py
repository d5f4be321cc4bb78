"""Main pipeline: detect the stack, synthesize artifacts, write them out."""

import logging

from analyzers.detector import StackDetector
from core.probe import FileProbe
from core.state import DockerizeResult
from generators.synthesizer import ArtifactSynthesizer, synthesis_mode

logger = logging.getLogger(__name__)


class Orchestrator:
    """Runs detect → synthesize → write for one target directory.

    Every run starts from a fresh scan. Writing overwrites existing files, so
    running twice on an unchanged directory yields identical output.
    """

    def __init__(self, detector=None, synthesizer=None, probe_factory=FileProbe):
        self.detector = detector or StackDetector(probe_factory=probe_factory)
        self.synthesizer = synthesizer or ArtifactSynthesizer()
        self.probe_factory = probe_factory

    def detect(self, root):
        return self.detector.detect(root)

    def synthesize(self, profile):
        return self.synthesizer.synthesize(profile)

    def write_files(self, root, files):
        """Write every artifact under root in order.

        The first WriteError propagates and the remaining files are skipped;
        files already written stay on disk.
        """
        probe = self.probe_factory(root)
        written = []
        for name, content in files.items():
            written.append(probe.write_file(name, content))
            logger.debug("Wrote %s", name)
        return written

    def run(self, root, dry_run=False) -> DockerizeResult:
        profile = self.detect(root)
        files = self.synthesize(profile)
        result = DockerizeResult(profile=profile, files=files, mode=synthesis_mode(profile))
        if not dry_run:
            result.written = self.write_files(root, files)
            logger.info("Wrote %d file(s) to %s", len(result.written), root)
        return result
