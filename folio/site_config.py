"""Application configuration (config.yml) and external list data sources.

The app config fails loudly (the site cannot render without it). Data
sources fail soft like feeds: a broken projects or websites list logs a
warning and yields an empty list.
"""

import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import aiohttp
import yaml

from folio import config
from folio.fetch import FetchError, get_bytes
from folio.models import (
    AppConfig,
    DataSourceConfig,
    DisplayConfig,
    FooterConfig,
    FooterLink,
    Profile,
    Project,
    SeoConfig,
    SiteSettings,
    SocialLink,
    Website,
)

log = logging.getLogger("folio.site_config")

SOURCE_TYPES = ("local", "remote")
SOURCE_FORMATS = ("yml", "json")
WEBSITE_STATUSES = ("Live", "Maintenance", "Beta")


class ConfigError(Exception):
    """config.yml is missing, unreachable or unusable."""


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _read_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


async def _read_text(location: str, session: Optional[aiohttp.ClientSession], timeout: float) -> str:
    if not _is_url(location):
        return await asyncio.to_thread(_read_file, location)
    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession()
    try:
        raw = await get_bytes(session, location, timeout)
    finally:
        if own_session:
            await session.close()
    return raw.decode("utf-8")


# =========================
# config.yml
# =========================

def _opt_str(data: Dict[str, Any], key: str) -> Optional[str]:
    v = data.get(key)
    return str(v) if v not in (None, "") else None


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    v = data.get(key) or {}
    if not isinstance(v, dict):
        raise ConfigError(f"{key} doit etre un mapping")
    return v


def _count(data: Dict[str, Any], key: str, default: int) -> int:
    try:
        return max(0, int(data.get(key, default)))
    except (TypeError, ValueError):
        log.warning("display.%s invalide (%r), valeur par defaut %d.", key, data.get(key), default)
        return default


def _data_source(data: Any, name: str) -> Optional[DataSourceConfig]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ConfigError(f"dataSources.{name} doit etre un mapping")
    src_type = str(data.get("type", "local"))
    src_format = str(data.get("format", "json"))
    if src_type not in SOURCE_TYPES:
        raise ConfigError(f"dataSources.{name}.type inconnu: {src_type}")
    if src_format not in SOURCE_FORMATS:
        raise ConfigError(f"dataSources.{name}.format inconnu: {src_format}")
    return DataSourceConfig(type=src_type, format=src_format, path=str(data.get("path") or ""))


def app_config_from_dict(data: Dict[str, Any]) -> AppConfig:
    profile = _section(data, "profile")
    site = _section(data, "site")
    footer = _section(data, "footer")
    display = _section(data, "display")
    sources = _section(data, "dataSources")
    seo = data.get("seo")

    return AppConfig(
        profile=Profile(
            name=str(profile.get("name", "")),
            title=str(profile.get("title", "")),
            description=str(profile.get("description", "")),
            avatar=str(profile.get("avatar", "")),
            tagline=_opt_str(profile, "tagline"),
            social=[
                SocialLink(platform=str(s.get("platform", "")), url=str(s.get("url", "")), icon=str(s.get("icon", "")))
                for s in (profile.get("social") or [])
                if isinstance(s, dict)
            ],
        ),
        site=SiteSettings(
            brand_name=str(site.get("brandName", "")),
            logo_text=_opt_str(site, "logoText"),
            logo_image=_opt_str(site, "logoImage"),
            favicon=_opt_str(site, "favicon"),
            rss_url=_opt_str(site, "rssUrl"),
            icon_font_url=_opt_str(site, "iconFontUrl"),
        ),
        footer=FooterConfig(
            owner=str(footer.get("owner", "")),
            icp=_opt_str(footer, "icp"),
            links=[
                FooterLink(text=str(ln.get("text", "")), url=_opt_str(ln, "url"))
                for ln in (footer.get("links") or [])
                if isinstance(ln, dict)
            ],
        ),
        display=DisplayConfig(
            project_count=_count(display, "projectCount", 6),
            website_count=_count(display, "websiteCount", 6),
            article_count=_count(display, "articleCount", 5),
        ),
        projects_source=_data_source(sources.get("projects"), "projects"),
        websites_source=_data_source(sources.get("websites"), "websites"),
        seo=SeoConfig(
            title=_opt_str(seo, "title"),
            description=_opt_str(seo, "description"),
            keywords=_opt_str(seo, "keywords"),
            author=_opt_str(seo, "author"),
            og_image=_opt_str(seo, "ogImage"),
            twitter_handle=_opt_str(seo, "twitterHandle"),
        ) if isinstance(seo, dict) else None,
    )


async def load_app_config(source: str, session: Optional[aiohttp.ClientSession] = None) -> AppConfig:
    """Load config.yml from a path or URL. Raises ConfigError."""
    try:
        text = await _read_text(source, session, config.DATA_FETCH_TIMEOUT)
    except (OSError, FetchError, aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
        log.error("Lecture config %s impossible: %s", source, e)
        raise ConfigError("config.yml not found or unreachable") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"config.yml is not valid YAML: {e}") from e
    if not data or not isinstance(data, dict):
        raise ConfigError("config.yml is empty or invalid")
    return app_config_from_dict(data)


# =========================
# Data sources (projects / websites)
# =========================

def resolve_location(source: DataSourceConfig, data_root: str) -> str:
    if source.type == "remote":
        return source.path
    if _is_url(data_root):
        return urljoin(data_root.rstrip("/") + "/", source.path.lstrip("/"))
    return os.path.join(data_root, source.path.lstrip("/"))


async def fetch_external_data(
    source: Optional[DataSourceConfig],
    data_root: str = ".",
    session: Optional[aiohttp.ClientSession] = None,
) -> List[Dict[str, Any]]:
    if not source or not source.path:
        return []

    location = resolve_location(source, data_root)
    try:
        text = await _read_text(location, session, config.DATA_FETCH_TIMEOUT)
        data = yaml.safe_load(text) if source.format == "yml" else json.loads(text)
    except (
        OSError, FetchError, aiohttp.ClientError, asyncio.TimeoutError,
        UnicodeDecodeError, yaml.YAMLError, ValueError,
    ) as e:
        log.warning("Echec chargement donnees %s: %s", location, e)
        return []

    if data is None:
        return []
    if not isinstance(data, list):
        log.warning("Donnees %s ignorees: liste attendue, recu %s.", location, type(data).__name__)
        return []
    out = [x for x in data if isinstance(x, dict)]
    if len(out) != len(data):
        log.warning("Donnees %s: %d entree(s) non-mapping ignoree(s).", location, len(data) - len(out))
    return out


def _tags(v: Any) -> List[str]:
    if isinstance(v, list):
        return [str(t) for t in v if t not in (None, "")]
    if isinstance(v, str) and v.strip():
        return [t.strip() for t in v.split(",") if t.strip()]
    return []


def project_from_dict(d: Dict[str, Any]) -> Optional[Project]:
    if not d.get("id") or not d.get("title"):
        log.warning("Projet ignore (id/title manquant): %r", d)
        return None
    return Project(
        id=str(d["id"]),
        title=str(d["title"]),
        description=str(d.get("description", "")),
        image_url=str(d.get("imageUrl", "")),
        tags=_tags(d.get("tags")),
        link=str(d.get("link", "")),
        repo=_opt_str(d, "repo"),
    )


def website_from_dict(d: Dict[str, Any]) -> Optional[Website]:
    if not d.get("id") or not d.get("title"):
        log.warning("Site ignore (id/title manquant): %r", d)
        return None
    status = str(d.get("status", "Live"))
    if status not in WEBSITE_STATUSES:
        log.debug("Statut inconnu %r pour %s, 'Live' par defaut.", status, d["id"])
        status = "Live"
    return Website(
        id=str(d["id"]),
        title=str(d["title"]),
        url=str(d.get("url", "")),
        status=status,
        description=str(d.get("description", "")),
        thumbnail=str(d.get("thumbnail", "")),
    )


async def load_projects(source, data_root=".", session=None) -> List[Project]:
    rows = await fetch_external_data(source, data_root, session)
    return [p for p in (project_from_dict(r) for r in rows) if p is not None]


async def load_websites(source, data_root=".", session=None) -> List[Website]:
    rows = await fetch_external_data(source, data_root, session)
    return [w for w in (website_from_dict(r) for r in rows) if w is not None]
