"""
Domain Constants: 게이트웨이 전역 상수.

뷰 이름, 데이터 파일명, 응답 메시지 등.
"""

# =============================================================================
# Content Store Files
# =============================================================================
# data/
# ├── articles.json
# └── categories.json

ARTICLES_FILENAME = "articles.json"
CATEGORIES_FILENAME = "categories.json"
STORE_LOCK_FILENAME = ".content.lock"

# =============================================================================
# Views (src/app/templates/)
# =============================================================================

VIEW_ABOUT = "about.html"
VIEW_HOME = "home.html"
VIEW_ARTICLES = "articles.html"
VIEW_ARTICLE = "article.html"
VIEW_CATEGORIES = "categories.html"
VIEW_ADD_ARTICLE = "addArticle.html"
VIEW_MODIFY = "modify.html"
VIEW_NOT_FOUND = "404.html"

# =============================================================================
# Form Fields
# =============================================================================

REQUIRED_ARTICLE_FIELDS = ("title", "content", "category")
PUBLISHED_CHECKED = "on"  # HTML checkbox 체크 시 전송 값

# =============================================================================
# Response Messages
# =============================================================================

MSG_NO_ARTICLES = "No articles available or error fetching."
MSG_NO_CATEGORIES = "No categories available or error fetching."
MSG_POST_NOT_FOUND = "Post not found"
MSG_ARTICLE_NOT_FOUND = "Article not found"
MSG_MISSING_FIELDS = "Missing required fields"
MSG_INTERNAL_ERROR = "Internal Server Error"
