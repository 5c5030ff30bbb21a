from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Article:
    guid: str
    title: str
    link: str
    pub_date: str  # texte brut du flux, ou ISO-8601 UTC "now" si absent
    description: str  # peut contenir du HTML
    thumbnail: Optional[str] = None  # None = pas d'image (distinct de "")
    categories: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = {
            "guid": self.guid,
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date,
            "description": self.description,
            "categories": list(self.categories),
        }
        if self.thumbnail is not None:
            out["thumbnail"] = self.thumbnail
        return out


@dataclass(frozen=True)
class Project:
    id: str
    title: str
    description: str
    image_url: str
    tags: List[str]
    link: str
    repo: Optional[str] = None  # GitHub/GitLab/Gitea...


@dataclass(frozen=True)
class Website:
    id: str
    title: str
    url: str
    status: str  # Live | Maintenance | Beta
    description: str
    thumbnail: str


@dataclass(frozen=True)
class DataSourceConfig:
    type: str  # local | remote
    format: str  # yml | json
    path: str


@dataclass(frozen=True)
class SocialLink:
    platform: str
    url: str
    icon: str = ""


@dataclass(frozen=True)
class Profile:
    name: str
    title: str
    description: str
    avatar: str
    tagline: Optional[str] = None
    social: List[SocialLink] = field(default_factory=list)


@dataclass(frozen=True)
class SiteSettings:
    brand_name: str
    logo_text: Optional[str] = None
    logo_image: Optional[str] = None
    favicon: Optional[str] = None
    rss_url: Optional[str] = None
    icon_font_url: Optional[str] = None


@dataclass(frozen=True)
class DisplayConfig:
    project_count: int = 6
    website_count: int = 6
    article_count: int = 5


@dataclass(frozen=True)
class FooterLink:
    text: str
    url: Optional[str] = None


@dataclass(frozen=True)
class FooterConfig:
    owner: str
    icp: Optional[str] = None
    links: List[FooterLink] = field(default_factory=list)


@dataclass(frozen=True)
class SeoConfig:
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    author: Optional[str] = None
    og_image: Optional[str] = None
    twitter_handle: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    profile: Profile
    site: SiteSettings
    footer: FooterConfig
    display: DisplayConfig = field(default_factory=DisplayConfig)
    projects_source: Optional[DataSourceConfig] = None
    websites_source: Optional[DataSourceConfig] = None
    seo: Optional[SeoConfig] = None


@dataclass(frozen=True)
class HomePage:
    projects: List[Project]
    websites: List[Website]
    articles: List[Article]
    article_empty_message: Optional[str] = None
