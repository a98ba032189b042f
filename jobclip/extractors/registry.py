"""
Extractor registry and dispatch.

Extractors are kept in registration order; for an address claimed by more
than one extractor the earliest registered wins.
"""
import logging
from typing import Dict, List, Optional

from jobclip.core.models import JobPosting
from jobclip.core.page import PageSnapshot
from .base import SiteExtractor

logger = logging.getLogger(__name__)

# Global registry instance
_registry: Optional['ExtractorRegistry'] = None


class ExtractorRegistry:
    """Ordered registry of site extractors"""

    def __init__(self):
        self._extractors: List[SiteExtractor] = []
        self._extractors_by_name: Dict[str, SiteExtractor] = {}

    def register(self, extractor: SiteExtractor):
        """Append an extractor; earlier registrations keep priority."""
        if extractor.name in self._extractors_by_name:
            logger.warning(f"[registry] Extractor {extractor.name} already registered, adding again at lower priority")

        self._extractors_by_name.setdefault(extractor.name, extractor)
        self._extractors.append(extractor)

        logger.debug(f"[registry] Registered extractor: {extractor.name} (position={len(self._extractors)})")

    def get_extractor(self, name: str) -> Optional[SiteExtractor]:
        """Get extractor by name"""
        return self._extractors_by_name.get(name)

    def find_extractor(self, url: str) -> Optional[SiteExtractor]:
        """
        First extractor whose ownership predicate accepts `url`.

        Returns:
            Matching extractor or None for unsupported sites
        """
        for extractor in self._extractors:
            try:
                if extractor.can_handle(url):
                    logger.debug(f"[registry] Selected extractor: {extractor.name} for {url[:80]}")
                    return extractor
            except Exception as e:
                logger.error(f"[registry] {extractor.name}.can_handle raised: {e}", exc_info=True)
        return None

    def extract(self, page: PageSnapshot, url: Optional[str] = None) -> JobPosting:
        """
        Extract job data from a page with the matching extractor.

        Args:
            page: Page snapshot
            url: Address to dispatch on (defaults to the page's own address)

        Returns:
            JobPosting; empty when no extractor matches
        """
        address = url or page.url
        extractor = self.find_extractor(address)

        if not extractor:
            logger.info(f"[registry] No extractor for {address[:80]}")
            return JobPosting()

        try:
            posting = extractor.extract(page)
        except Exception as e:
            logger.error(f"[registry] Extractor {extractor.name} raised: {e}", exc_info=True)
            return JobPosting()

        logger.info(f"[registry] {extractor.name} extracted {len(posting.to_dict())} fields from {address[:80]}")
        return posting

    def list_extractors(self) -> List[Dict]:
        """List all registered extractors in priority order"""
        return [
            {
                'name': extractor.name,
                'priority': position,
                'class': extractor.__class__.__name__,
                'url_patterns': list(getattr(extractor, 'url_patterns', ())),
            }
            for position, extractor in enumerate(self._extractors, start=1)
        ]

    def __len__(self):
        return len(self._extractors)


def get_extractor_registry() -> ExtractorRegistry:
    """Get or create the global extractor registry"""
    global _registry
    if _registry is None:
        _registry = ExtractorRegistry()
        _register_builtin_extractors(_registry)
    return _registry


def _register_builtin_extractors(registry: ExtractorRegistry):
    """Register all built-in extractors, in priority order"""
    from .linkedin import LinkedInExtractor
    from .greenhouse import GreenhouseExtractor
    from .ashby import AshbyExtractor
    from .workable import WorkableExtractor
    from .lever import LeverExtractor
    from .icims import IcimsExtractor

    registry.register(LinkedInExtractor())
    registry.register(GreenhouseExtractor())
    registry.register(AshbyExtractor())
    registry.register(WorkableExtractor())
    registry.register(LeverExtractor())
    registry.register(IcimsExtractor())


def find_extractor(url: str) -> Optional[SiteExtractor]:
    return get_extractor_registry().find_extractor(url)


def extract_job_data(page: PageSnapshot, url: Optional[str] = None) -> JobPosting:
    """Extract from `page`, dispatching on `url` or the page's own address."""
    return get_extractor_registry().extract(page, url)


def register_extractor(extractor: SiteExtractor):
    get_extractor_registry().register(extractor)
