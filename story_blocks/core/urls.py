"""
Helpers URL — liens de cards, vidéos YouTube, snippets d'embed collés.
"""
import re
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

_TWEET_HREF = re.compile(r'<a[^>]+href="([^"]+)"', re.IGNORECASE)
_IFRAME_SRC = re.compile(r'<iframe[^>]+src="([^"]+)"', re.IGNORECASE)
_TWEET_STATUS = re.compile(r"status/(\d+)")


def normalize_url(raw: str) -> str:
    """Ajoute https:// si le schéma est absent."""
    if not raw:
        return raw
    if re.match(r"^https?://", raw, re.IGNORECASE):
        return raw
    return f"https://{raw}"


def host_of(url: str) -> Optional[str]:
    """Hôte sans www., en minuscules — None si l'URL n'est pas absolue."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    host = parts.hostname.lower()
    return host[4:] if host.startswith("www.") else host


def youtube_embed_url(url: Optional[str]) -> Optional[str]:
    """
    URL /embed/ pour n'importe quel lien YouTube.
    youtu.be/ID, youtube.com/watch?v=ID, youtube.com/embed/ID → ok ; sinon None.
    """
    if not url:
        return None
    host = host_of(url)
    if host is None:
        return None
    parts = urlsplit(url)
    if host == "youtu.be":
        return f"https://www.youtube.com/embed{parts.path}"
    if host.endswith("youtube.com"):
        video_id = parse_qs(parts.query).get("v", [""])[0]
        if video_id:
            return f"https://www.youtube.com/embed/{video_id}"
        if parts.path.startswith("/embed/"):
            return url
    return None


def tweet_id(url: str) -> Optional[str]:
    """Id d'un tweet : /status/<id> ou ?id=<id> (ancien iframe platform.twitter.com)."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    m = _TWEET_STATUS.search(parts.path)
    if m:
        return m.group(1)
    return parse_qs(parts.query).get("id", [None])[0]


def normalize_embed_input(raw: str) -> str:
    """
    Nettoie ce que l'admin colle dans le champ embed.

    - blockquote "twitter-tweet" → dernier lien (celui du tweet)
    - <iframe src="..."> → src
    - Facebook → paramètres width/height retirés
    """
    if not raw:
        return ""
    trimmed = raw.strip()

    if "twitter-tweet" in trimmed:
        hrefs = _TWEET_HREF.findall(trimmed)
        if hrefs:
            return hrefs[-1]

    m = _IFRAME_SRC.search(trimmed)
    src = m.group(1) if m else trimmed

    host = host_of(src)
    if host is None:
        return src
    if "facebook.com" in host:
        parts = urlsplit(src)
        query = [(k, v) for k, vs in parse_qs(parts.query, keep_blank_values=True).items()
                 for v in vs if k not in ("width", "height")]
        return urlunsplit(parts._replace(query=urlencode(query)))
    return src
