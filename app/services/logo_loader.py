"""
Logo loader for LR requests

Remote logos (http/https URLs) are downloaded here, before the renderer is
called, so rendering itself never touches the network. One attempt per URL;
a failed or oversized download simply means "no logo".

Logos in a request body may only be inline (a data URI or base64 text) or
remote. Anything else, such as a path on this server, is dropped.
"""

import base64
import binascii
import logging
from typing import Optional, Tuple, Union

import httpx

from app.core.config import Settings, settings as default_settings
from app.schemas.lr import CompanyProfile, StandaloneLRDocument, TemplateConfig

logger = logging.getLogger(__name__)

LogoSource = Union[str, bytes, None]


def is_remote(source: LogoSource) -> bool:
    return isinstance(source, str) and source.strip().lower().startswith(("http://", "https://"))


def inline_logo(text: str) -> Optional[bytes]:
    """Decode a data URI or raw base64 logo; None for anything else"""
    payload = text.strip()
    if payload.startswith("data:"):
        payload = payload.partition(",")[2]
    payload = "".join(payload.split())
    if not payload:
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("⚠️ Logo is neither a URL nor inline image data, ignoring it")
        return None


def fetch_logo(url: str, timeout: float, max_bytes: int,
               client: Optional[httpx.Client] = None) -> Optional[bytes]:
    """Download url; None on any HTTP failure or when the body exceeds max_bytes"""
    owns_client = client is None
    client = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            chunks = []
            received = 0
            for chunk in response.iter_bytes():
                received += len(chunk)
                if received > max_bytes:
                    logger.warning(f"⚠️ Logo at {url} exceeds {max_bytes} bytes, ignoring it")
                    return None
                chunks.append(chunk)
        logger.info(f"Fetched logo from {url}: {received} bytes")
        return b"".join(chunks)
    # InvalidURL is not an HTTPError
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"⚠️ Could not fetch logo from {url}: {e}")
        return None
    finally:
        if owns_client:
            client.close()


def _load(source: LogoSource, config: Settings, client: Optional[httpx.Client]) -> LogoSource:
    if not isinstance(source, str):
        return source
    if not is_remote(source):
        return inline_logo(source)
    if not config.ENABLE_LOGO_FETCH:
        return source
    return fetch_logo(source.strip(), config.LOGO_FETCH_TIMEOUT_SECONDS, config.MAX_LOGO_BYTES, client)


def prefetch_logos(company: Optional[CompanyProfile], template_config: Optional[TemplateConfig],
                   config: Optional[Settings] = None,
                   client: Optional[httpx.Client] = None) -> Tuple[Optional[CompanyProfile], Optional[TemplateConfig]]:
    """
    Turn the company and template logos into bytes the renderer can embed.

    Remote URLs are downloaded and inline data is decoded. Any other string
    becomes None.
    """
    config = config or default_settings

    if company is not None and isinstance(company.logo_url, str):
        company = company.model_copy(update={"logo_url": _load(company.logo_url, config, client)})

    if template_config is not None and isinstance(template_config.header_config.logo_url, str):
        header = template_config.header_config
        header = header.model_copy(update={"logo_url": _load(header.logo_url, config, client)})
        template_config = template_config.model_copy(update={"header_config": header})

    return company, template_config


def prefetch_standalone_logo(lr: Optional[StandaloneLRDocument], config: Optional[Settings] = None,
                             client: Optional[httpx.Client] = None) -> Optional[StandaloneLRDocument]:
    """Same as prefetch_logos for the company logo a standalone LR carries itself"""
    if lr is None or not isinstance(lr.company_logo_url, str):
        return lr
    config = config or default_settings
    return lr.model_copy(update={"company_logo_url": _load(lr.company_logo_url, config, client)})
