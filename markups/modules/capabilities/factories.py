"""
Capability factories.

Each factory fetches the asset bundle for one capability from the CDN and
returns a CapabilityBundle. Factories are plain awaitable callables so the
loader can treat them uniformly; they do not cache anything themselves. Any
one-time setup is guarded by the factory's own `configured` flag.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from markups.modules.loader import LoaderFactory

from .keys import DIAGRAM_ENGINE, DOCX_EXPORT, MATH_ENGINE, PDF_EXPORT

logger = logging.getLogger(__name__)

DEFAULT_CDN_BASE_URL = "https://cdn.jsdelivr.net/npm"

MERMAID_VERSION = "10.6.1"
KATEX_VERSION = "0.16.9"
HTML2PDF_VERSION = "0.10.1"
DOCX_VERSION = "8.5.0"

DIAGRAM_SETTINGS: Dict[str, Any] = {
    "startOnLoad": False,
    "theme": "default",
    "securityLevel": "loose",
    "fontFamily": "inherit",
    "logLevel": "error",
    "flowchart": {
        "useMaxWidth": True,
        "htmlLabels": True,
    },
}


@dataclass
class CapabilityBundle:
    """A loaded capability: its fetched assets plus render settings."""

    key: str
    version: str
    assets: Dict[str, str] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)

    def describe(self) -> Dict[str, Any]:
        """Summary without asset bodies, for the diagnostics API."""
        return {
            "key": self.key,
            "version": self.version,
            "assets": {name: len(body) for name, body in self.assets.items()},
            "settings": dict(self.settings),
        }


class AssetFactory:
    """
    Base factory: fetch a single script bundle from the CDN.

    Subclasses set `key`, `package`, `version` and `script_path`, and may
    override `configure()` for one-time setup.
    """

    key: str = ""
    package: str = ""
    version: str = ""
    script_path: str = ""

    def __init__(self, client: httpx.AsyncClient, cdn_base_url: str = DEFAULT_CDN_BASE_URL):
        """
        Args:
            client: Shared async HTTP client
            cdn_base_url: Base URL of an npm CDN (jsdelivr layout)
        """
        self.client = client
        self.cdn_base_url = cdn_base_url.rstrip("/")
        self.configured = False

    def asset_url(self, path: str) -> str:
        return f"{self.cdn_base_url}/{self.package}@{self.version}/{path}"

    async def fetch_asset(self, path: str) -> str:
        """
        Fetch one asset body.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses
            ValueError: If the asset body is empty
        """
        url = self.asset_url(path)
        logger.debug(f"Fetching {url}")
        response = await self.client.get(url)
        response.raise_for_status()
        if not response.text.strip():
            raise ValueError(f"empty asset: {url}")
        return response.text

    def configure(self, bundle: CapabilityBundle) -> None:
        """One-time setup hook; no-op by default."""

    async def __call__(self) -> CapabilityBundle:
        script = await self.fetch_asset(self.script_path)
        bundle = CapabilityBundle(
            key=self.key, version=self.version, assets={"script": script}
        )
        self.configure(bundle)
        return bundle


class DiagramEngineFactory(AssetFactory):
    """Mermaid diagram renderer."""

    key = DIAGRAM_ENGINE
    package = "mermaid"
    version = MERMAID_VERSION
    script_path = "dist/mermaid.min.js"

    def __init__(self, client: httpx.AsyncClient, cdn_base_url: str = DEFAULT_CDN_BASE_URL):
        super().__init__(client, cdn_base_url)
        self.settings: Dict[str, Any] = {}

    def configure(self, bundle: CapabilityBundle) -> None:
        if not self.configured:
            self.settings = copy.deepcopy(DIAGRAM_SETTINGS)
            self.configured = True
            logger.debug("Diagram engine render settings initialized")
        bundle.settings = self.settings


class MathEngineFactory(AssetFactory):
    """KaTeX math typesetter plus its stylesheet."""

    key = MATH_ENGINE
    package = "katex"
    version = KATEX_VERSION
    script_path = "dist/katex.min.js"
    stylesheet_path = "dist/katex.min.css"

    def __init__(self, client: httpx.AsyncClient, cdn_base_url: str = DEFAULT_CDN_BASE_URL):
        super().__init__(client, cdn_base_url)
        self.stylesheet: Optional[str] = None

    async def __call__(self) -> CapabilityBundle:
        bundle = await super().__call__()
        if not self.configured:
            self.stylesheet = await self.fetch_asset(self.stylesheet_path)
            self.configured = True
        bundle.assets["stylesheet"] = self.stylesheet
        return bundle


class PdfExportFactory(AssetFactory):
    """html2pdf.js exporter."""

    key = PDF_EXPORT
    package = "html2pdf.js"
    version = HTML2PDF_VERSION
    script_path = "dist/html2pdf.bundle.min.js"


class DocxExportFactory(AssetFactory):
    """docx document builder."""

    key = DOCX_EXPORT
    package = "docx"
    version = DOCX_VERSION
    script_path = "build/index.umd.js"


FACTORY_CLASSES = (
    DiagramEngineFactory,
    MathEngineFactory,
    PdfExportFactory,
    DocxExportFactory,
)


def build_registry(
    client: httpx.AsyncClient, cdn_base_url: str = DEFAULT_CDN_BASE_URL
) -> Dict[str, LoaderFactory]:
    """
    Build the fixed capability registry.

    Args:
        client: Shared async HTTP client used by every factory
        cdn_base_url: Base URL of the npm CDN

    Returns:
        Mapping of capability key to factory
    """
    return {cls.key: cls(client, cdn_base_url) for cls in FACTORY_CLASSES}
