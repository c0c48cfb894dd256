"""
HTML pages.

Pages are small enough to build inline. Every value taken from a request
or from the filesystem goes through ``escape`` (text) or ``quote`` (URLs).
"""

from html import escape
from typing import Iterable, Optional
from urllib.parse import quote

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


def _page(title: str, body: str) -> str:
    return PAGE_TEMPLATE.format(title=escape(title), body=body)


def file_url(name: str) -> str:
    return f"/uploads/{quote(name, safe='')}"


def render_login() -> str:
    return _page(
        "Login",
        """<h1>Login</h1>
<form action="/login" method="post">
  <label>Username <input type="text" name="username" required></label><br>
  <label>Password <input type="password" name="password" required></label><br>
  <button type="submit">Login</button>
</form>""",
    )


def render_login_failed() -> str:
    return _page(
        "Login failed",
        '<p>Invalid username or password.</p>\n<a href="/login">Try again</a>',
    )


def render_upload_form(user: Optional[str] = None) -> str:
    greeting = f"<p>Logged in as {escape(user)}</p>\n" if user else ""
    return _page(
        "Upload",
        f"""<h1>Upload a file</h1>
{greeting}<form action="/upload" method="post" enctype="multipart/form-data">
  <input type="file" name="file" required>
  <button type="submit">Upload</button>
</form>
<a href="/list">View files</a> | <a href="/logout">Logout</a>""",
    )


def render_upload_success(stored_name: str) -> str:
    return _page(
        "Upload complete",
        f"""<h1>File uploaded successfully</h1>
<p><a href="{file_url(stored_name)}">{escape(stored_name)}</a></p>
<a href="/">Upload another file</a> | <a href="/list">View files</a> | <a href="/logout">Logout</a>""",
    )


DELETE_SCRIPT = """<script>
function deleteFile(name) {
  fetch('/delete/' + encodeURIComponent(name), {method: 'DELETE'})
    .then(function (res) { return res.text(); })
    .then(function (msg) { alert(msg); location.reload(); });
}
</script>"""


def render_file_list(names: Iterable[str]) -> str:
    rows = []
    for name in names:
        label = escape(name)
        rows.append(
            f'<li><a href="{file_url(name)}">{label}</a> '
            f'<button type="button" data-name="{label}" '
            f'onclick="deleteFile(this.dataset.name)">Delete</button></li>'
        )
    items = "\n".join(rows) if rows else "<li>No files uploaded yet.</li>"
    return _page(
        "Uploaded files",
        f"""<h1>Uploaded files</h1>
<ul>
{items}
</ul>
<a href="/">Upload a file</a> | <a href="/logout">Logout</a>
{DELETE_SCRIPT}""",
    )
