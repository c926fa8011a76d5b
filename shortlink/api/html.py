"""HTML rendered in response to the shortening form.

The browser client swaps its whole document for this page. The copy button
carries the bare code in ``data-url``; the page ships its own copy handler
since no static assets are served.
"""

from html import escape

from shortlink.models.link import Link

SHORTENED_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Your short link</title>
</head>
<body>
    <main>
        <h1>Your short link is ready</h1>
        <p><a id="shortLink" href="{short_url}">{short_url}</a></p>
        <p>Redirects to <span id="targetUrl">{target_url}</span></p>
        <button id="copyButton" data-url="{code}" onclick="copy_function()">Copy</button>
    </main>
    <script>
        function copy_function() {{
            const code = document.getElementById("copyButton").getAttribute("data-url");
            navigator.clipboard.writeText(window.location.origin + "/" + code);
        }}
    </script>
</body>
</html>
"""


def render_shortened_page(link: Link, short_url: str) -> str:
    """Render the success page for a freshly issued link."""
    return SHORTENED_PAGE.format(
        code=escape(link.code),
        short_url=escape(short_url),
        target_url=escape(link.target_url),
    )
