import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from sitebuilder.config import RESERVED_SUBDOMAINS, TENANT_HEADER
from sitebuilder.database.models.website_model import Website
from sitebuilder.services.website_service import WebsiteService

logger = logging.getLogger(__name__)

website_service = WebsiteService()


@dataclass
class TenantContext:
    website: Website
    slug: str
    type: str
    owner_id: int
    settings: dict[str, Any] = field(default_factory=dict)
    is_active: bool = True


def build_context(website: Website) -> TenantContext:
    return TenantContext(
        website=website,
        slug=website.slug,
        type=website.type,
        owner_id=website.owner_id,
        settings=website.settings or {},
        is_active=website.is_active,
    )


def hostname(request: Request) -> Optional[str]:
    host = request.headers.get("host")
    if not host:
        return None
    return host.split(":", 1)[0].strip().lower() or None


def normalize_slug(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.strip().lower() or None


def subdomain_from_host(host: Optional[str]) -> Optional[str]:
    """
    First label of `host` when it can name a tenant.

    Bare hosts (no dot) and reserved labels such as `www` or `api` yield None.
    """
    if not host:
        return None
    host = host.split(":", 1)[0].strip().lower()
    parts = host.split(".")
    if len(parts) < 2 or not parts[0]:
        return None
    if parts[0] in RESERVED_SUBDOMAINS:
        return None
    return parts[0]


def extract_tenant_slug(request: Request) -> Optional[str]:
    """Candidate slug by URL, then subdomain, then header. No lookup is done."""
    slug = normalize_slug(request.path_params.get("slug"))
    if slug:
        return slug
    subdomain = subdomain_from_host(hostname(request))
    if subdomain:
        return subdomain
    return normalize_slug(request.headers.get(TENANT_HEADER))


def resolve(request: Request, db: Session) -> Optional[TenantContext]:
    """
    Resolve the request to an active website.

    Tries the URL slug, the Host subdomain, a verified custom domain and
    the tenant header in that order. Lookup errors are logged and treated
    as no tenant so tenant independent routes keep working.
    """
    try:
        website = None

        slug = normalize_slug(request.path_params.get("slug"))
        if slug:
            website = website_service.get_by_slug(db, slug)

        if website is None:
            host = hostname(request)
            subdomain = subdomain_from_host(host)
            if subdomain:
                website = website_service.get_by_slug(db, subdomain)
            if website is None and host and "." in host:
                website = website_service.get_by_domain(db, host)

        if website is None:
            header_slug = normalize_slug(request.headers.get(TENANT_HEADER))
            if header_slug:
                website = website_service.get_by_slug(db, header_slug)

        if website is None:
            return None
        return build_context(website)
    except Exception:
        logger.warning("Tenant lookup failed for %s", request.url.path, exc_info=True)
        return None
