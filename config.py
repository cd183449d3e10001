# config.py

"""
Configuration file for the README Link Catalog
Modify these settings to point at another README or tune pacing.
"""

# 📄 Tracked document (GitHub repository + file path)
REPO_OWNER = "hkirat"
REPO_NAME = "what-im-learning"
DOCUMENT_PATH = "README.md"
GITHUB_API_URL = "https://api.github.com"
COMMITS_PER_PAGE = 100   # One page of history is scanned per lookup

# 💾 Storage settings
CATALOG_PATH = "links-data.json"   # Pretty-printed JSON catalog

# ⏱️ Fixed delays between requests (in seconds)
RESOLVE_DELAY_SECONDS = 1.0   # after each new link's metadata lookup
REVISION_DELAY_SECONDS = 0.1   # after each commit diff check
URL_DELAY_SECONDS = 1.0   # after each link's history lookup

# 🌐 HTTP
HTTP_TIMEOUT_SECONDS = 20
USER_AGENT = "Mozilla/5.0"

# 🎬 Video hosts
VIDEO_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtu.be",
}
VIDEO_PLACEHOLDER_TITLE = "YouTube Video"
OEMBED_URL = "https://www.youtube.com/oembed"
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"
THUMBNAIL_URL_TEMPLATE = "https://i.ytimg.com/vi/{video_id}/maxresdefault.jpg"
