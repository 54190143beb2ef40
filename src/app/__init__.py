"""
App layer: 서버 렌더링 CMS (FastAPI + Jinja2).

역할:
- 라우트: 폼/쿼리 입력 → content service 호출 → 뷰 렌더 또는 리다이렉트
- 서비스: content (JSON 저장소), uploads (Cloudinary), submission (작성 파이프라인)

주의: 폴더 구분
- src/app/templates/ → Jinja2 HTML
- src/app/static/ → CSS
- data/ (루트) → articles.json, categories.json
"""
