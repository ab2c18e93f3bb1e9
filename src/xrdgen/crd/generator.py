"""GitOps CRD generation from XRD source files."""

import hashlib
import logging
from pathlib import Path
import yaml
from pydantic import BaseModel, Field, ValidationError
from typing import List

from xrdgen import config
from xrdgen.exception import DirectoryNotFoundError, XRDGenError, XRDLoadError
from xrdgen.models.xrd import CompositeResourceDefinition

from .derive import for_composite_resource, for_composite_resource_claim

logger = logging.getLogger(__name__)

HASH_FILE = ".xrds_hash"
KUSTOMIZATION_FILE = "kustomization.yaml"

# Derivation passes, in the order they run.
GENERATORS = (
    ("composite", for_composite_resource),
    ("claim", for_composite_resource_claim),
)


class GenerationFailure(BaseModel):
    path: str
    kind: str
    message: str


class GenerationReport(BaseModel):
    """Outcome of one generation run."""

    generated: List[str] = Field(default_factory=list)
    failures: List[GenerationFailure] = Field(default_factory=list)
    skipped: bool = False

    @property
    def ok(self):
        return not self.failures


class XRDCRDManager:
    """Manages CRD generation for XRDs found below a root directory."""

    def __init__(self, root_dir=None, output_dir=None, patterns=None):
        self.root_dir = Path(root_dir) if root_dir else Path.cwd()
        self.output_dir = (
            Path(output_dir) if output_dir else config.crd_output_dir(self.root_dir)
        )
        self.patterns = list(patterns) if patterns else config.xrd_patterns()

    def find_xrd_paths(self, pattern):
        """Find XRD files named ``pattern`` one directory below the root."""
        if not self.root_dir.is_dir():
            raise DirectoryNotFoundError(self.root_dir)
        return sorted(self.root_dir.glob(f"*/{pattern}"))

    def discover_xrd_paths(self):
        """Find XRD files for every configured pattern, in pattern order."""
        paths = []
        for pattern in self.patterns:
            for path in self.find_xrd_paths(pattern):
                if path not in paths:
                    paths.append(path)
        return paths

    @staticmethod
    def load_xrd(path):
        """Load an XRD from a YAML file.

        Raises:
            XRDLoadError: If the file cannot be read or is not a valid XRD
        """
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            raise XRDLoadError(path, e) from e
        return XRDCRDManager.parse_xrd(path, content)

    @staticmethod
    def parse_xrd(path, content):
        """Parse the YAML ``content`` read from ``path`` into an XRD.

        Raises:
            XRDLoadError: If the content is not a valid XRD
        """
        try:
            return CompositeResourceDefinition.from_yaml(content)
        except (yaml.YAMLError, ValidationError, ValueError) as e:
            raise XRDLoadError(path, e) from e

    def _read_sources(self, paths, report):
        """Read every XRD file, recording unreadable ones as load failures.

        Returns:
            Dict mapping each path to its content, or None if it was unreadable
        """
        sources = {}
        for path in paths:
            try:
                sources[path] = path.read_bytes()
            except OSError as e:
                logger.error(f"Failed to read {path}: {e}")
                report.failures.append(
                    GenerationFailure(
                        path=str(path),
                        kind="load",
                        message=str(XRDLoadError(path, e)),
                    )
                )
                sources[path] = None
        return sources

    def generate_all_crds(self, force=False):
        """Generate composite and claim CRDs for all discovered XRDs.

        Generation is skipped when the XRD sources are unchanged since the
        last successful run, unless ``force`` is set.

        Returns:
            GenerationReport: Written files and per XRD failures
        """
        paths = self.discover_xrd_paths()
        report = GenerationReport()

        if not paths:
            logger.warning(f"No XRD files matching {self.patterns} under {self.root_dir}")
            return report

        self.output_dir.mkdir(parents=True, exist_ok=True)

        sources = self._read_sources(paths, report)
        current_hash = self._calculate_sources_hash(sources)
        hash_file = self.output_dir / HASH_FILE

        if not force and report.ok and hash_file.exists():
            stored_hash = hash_file.read_text().strip()
            if stored_hash == current_hash:
                logger.info("XRD sources unchanged, skipping generation")
                report.skipped = True
                return report

        logger.info(f"Generating CRDs from {len(paths)} XRD file(s)...")

        xrds = {}
        for path, content in sources.items():
            if content is None:
                continue
            try:
                xrds[path] = self.parse_xrd(path, content)
            except XRDLoadError as e:
                logger.error(f"Failed to load {path}: {e.reason}")
                report.failures.append(
                    GenerationFailure(path=str(path), kind="load", message=str(e))
                )

        for kind, generator in GENERATORS:
            for path, xrd in xrds.items():
                if kind == "claim" and not xrd.has_claim:
                    logger.debug(f"{path} declares no claim names, skipping claim CRD")
                    continue
                try:
                    crd = generator(xrd)
                except XRDGenError as e:
                    logger.error(f"Failed to generate {kind} CRD for {path}: {e}")
                    report.failures.append(
                        GenerationFailure(path=str(path), kind=kind, message=str(e))
                    )
                    continue

                filename = self.write_crd(crd)
                report.generated.append(filename)
                logger.info(f"Generated {kind} CRD: {filename}")

        if report.generated:
            self._generate_kustomization(report.generated)

        if report.ok:
            hash_file.write_text(current_hash)
        elif hash_file.exists():
            hash_file.unlink()

        logger.info(
            f"Generated {len(report.generated)} CRD files, "
            f"{len(report.failures)} failure(s)"
        )
        return report

    def write_crd(self, crd):
        """Write a CRD to the output directory and return its file name."""
        file_path = self.output_dir / crd.filename
        with open(file_path, "w") as f:
            yaml.dump(crd.to_manifest(), f, default_flow_style=False, sort_keys=False)
        return crd.filename

    def _generate_kustomization(self, filenames):
        """Generate kustomization.yaml for all CRDs."""
        kustomization = {
            "apiVersion": "kustomize.config.k8s.io/v1beta1",
            "kind": "Kustomization",
            "resources": sorted(set(filenames)),
        }

        kustomization_path = self.output_dir / KUSTOMIZATION_FILE
        with open(kustomization_path, "w") as f:
            yaml.dump(kustomization, f, default_flow_style=False)

        logger.info("Generated kustomization.yaml")

    def _calculate_sources_hash(self, sources):
        """Calculate a hash of all XRD sources for change detection."""
        digest = hashlib.sha256()
        for path, content in sources.items():
            digest.update(str(path.relative_to(self.root_dir)).encode())
            digest.update(content or b"")
        return digest.hexdigest()

    def get_crds_as_dict(self):
        """Derive all CRDs in memory.

        Returns:
            Dict mapping CRD names to their manifests. XRDs or kinds that fail
            to derive are logged and left out.
        """
        crds = {}
        for path in self.discover_xrd_paths():
            try:
                xrd = self.load_xrd(path)
            except XRDLoadError as e:
                logger.error(f"Failed to load {path}: {e.reason}")
                continue

            for kind, generator in GENERATORS:
                if kind == "claim" and not xrd.has_claim:
                    continue
                try:
                    crd = generator(xrd)
                except XRDGenError as e:
                    logger.error(f"Failed to generate in-memory {kind} CRD for {path}: {e}")
                    continue
                crds[crd.name] = crd.to_manifest()

        return crds

    def validate_generated_crds(self):
        """Validate that generated CRDs are well formed Kubernetes resources."""
        if not self.output_dir.exists():
            logger.error("CRD output directory does not exist")
            return False

        crd_files = [
            f
            for f in sorted(self.output_dir.glob("*.yaml"))
            if f.name != KUSTOMIZATION_FILE
        ]

        if not crd_files:
            logger.error("No CRD files found to validate")
            return False

        valid_count = 0
        for crd_file in crd_files:
            try:
                with open(crd_file, "r") as f:
                    crd_def = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to read {crd_file}: {e}")
                continue

            if not isinstance(crd_def, dict):
                logger.error(f"Invalid YAML in {crd_file}")
                continue

            required_fields = ["apiVersion", "kind", "metadata", "spec"]
            if not all(field in crd_def for field in required_fields):
                logger.error(f"Missing required fields in {crd_file}")
                continue

            if crd_def["kind"] != "CustomResourceDefinition":
                logger.error(f"Not a CRD: {crd_file}")
                continue

            versions = crd_def["spec"].get("versions") or []
            if not versions or not all(
                "openAPIV3Schema" in (v.get("schema") or {}) for v in versions
            ):
                logger.error(f"Missing version schemas in {crd_file}")
                continue

            valid_count += 1
            logger.debug(f"Valid CRD: {crd_file}")

        logger.info(f"Validated {valid_count}/{len(crd_files)} CRD files")
        return valid_count == len(crd_files)
