"""HTML pages served to browsers.

Pages are plain f-string templates; every piece of user content goes
through ``html.escape`` before it is interpolated.
"""

import html
from typing import Optional

from app.core.config import settings

_STYLE = """
        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }
        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
            background: #f0f2f5;
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
            padding: 20px;
        }
        .container {
            background: white;
            border-radius: 8px;
            box-shadow: 0 4px 20px rgba(0, 0, 0, 0.15);
            max-width: 900px;
            width: 100%;
            padding: 32px;
        }
        h1 {
            color: #333;
            margin-bottom: 16px;
            font-size: 24px;
        }
        label {
            display: block;
            color: #555;
            font-size: 14px;
            margin: 12px 0 4px;
        }
        textarea, input {
            width: 100%;
            padding: 8px;
            border: 1px solid #ccc;
            border-radius: 4px;
            font-family: "Courier New", monospace;
        }
        textarea {
            min-height: 240px;
        }
        button {
            margin-top: 16px;
            padding: 10px 20px;
            border: none;
            border-radius: 4px;
            background: #3b5bdb;
            color: white;
            cursor: pointer;
        }
        .content {
            background: #f5f5f5;
            border: 1px solid #ddd;
            border-radius: 4px;
            padding: 16px;
            font-family: "Courier New", monospace;
            font-size: 14px;
            line-height: 1.6;
            white-space: pre-wrap;
            word-wrap: break-word;
            color: #333;
        }
        .meta {
            color: #666;
            font-size: 13px;
            margin-top: 12px;
        }
        .error {
            color: #c92a2a;
        }
        .footer {
            margin-top: 20px;
            font-size: 13px;
        }
"""


def _layout(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)} - {html.escape(settings.APP_NAME)}</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>"""


def render_create_page() -> str:
    """Form that posts a new paste as JSON and shows the resulting link."""
    api_url = f"{settings.API_PREFIX}/pastes"
    body = f"""        <h1>New paste</h1>
        <form id="paste-form">
            <label for="content">Content</label>
            <textarea id="content" name="content" required></textarea>
            <label for="ttl_seconds">Expire after (seconds, optional)</label>
            <input id="ttl_seconds" name="ttl_seconds" type="number" min="1">
            <label for="max_views">Maximum views (optional)</label>
            <input id="max_views" name="max_views" type="number" min="1">
            <button type="submit">Create paste</button>
        </form>
        <div id="result" class="meta"></div>
        <script>
            document.getElementById("paste-form").addEventListener("submit", async (event) => {{
                event.preventDefault();
                const result = document.getElementById("result");
                const payload = {{ content: document.getElementById("content").value }};
                const ttl = document.getElementById("ttl_seconds").value;
                const views = document.getElementById("max_views").value;
                if (ttl) payload.ttl_seconds = parseInt(ttl, 10);
                if (views) payload.max_views = parseInt(views, 10);
                result.textContent = "";
                result.className = "meta";
                try {{
                    const response = await fetch("{api_url}", {{
                        method: "POST",
                        headers: {{ "Content-Type": "application/json" }},
                        body: JSON.stringify(payload)
                    }});
                    const data = await response.json();
                    if (!response.ok) {{
                        result.className = "meta error";
                        result.textContent = data.error || "Failed to create paste";
                        return;
                    }}
                    const link = document.createElement("a");
                    link.href = data.url;
                    link.textContent = data.url;
                    result.append("Paste created: ", link);
                }} catch (err) {{
                    result.className = "meta error";
                    result.textContent = "Failed to create paste";
                }}
            }});
        </script>"""
    return _layout("New paste", body)


def render_paste_page(
    paste_id: str,
    content: str,
    remaining_views: Optional[int] = None,
    expires_at: Optional[str] = None,
) -> str:
    """Page showing a paste's content with its remaining views and expiry."""
    meta_lines = []
    if remaining_views is not None:
        meta_lines.append(f"<p>Remaining views: {remaining_views}</p>")
    if expires_at is not None:
        meta_lines.append(f"<p>Expires at: {html.escape(expires_at)}</p>")
    meta = "\n            ".join(meta_lines)

    body = f"""        <h1>Paste {html.escape(paste_id)}</h1>
        <pre class="content">{html.escape(content)}</pre>
        <div class="meta">
            {meta}
        </div>
        <div class="footer"><a href="/">Create a new paste</a></div>"""
    return _layout(f"Paste {paste_id}", body)


def render_not_found_page() -> str:
    """Page for an absent or expired paste."""
    body = """        <h1>Paste not found</h1>
        <p class="meta">This paste does not exist, has expired, or has reached its view limit.</p>
        <div class="footer"><a href="/">Create a new paste</a></div>"""
    return _layout("Not found", body)
