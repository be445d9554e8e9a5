"""Server-rendered HTML for the public index, the admin screen and login."""

from __future__ import annotations

from html import escape

from pubhost.core.catalog import Catalog, FileRecord, group_by_category

UNCATEGORIZED_LABEL = "Uncategorized"

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""

_LOGIN_SCRIPT = """<script>
document.getElementById('login').addEventListener('submit', async (e) => {
  e.preventDefault();
  const password = e.target.password.value;
  const res = await fetch('%(api)s/auth', {
    method: 'POST',
    headers: {'Content-Type': 'application/json'},
    body: JSON.stringify({password}),
  });
  if (res.ok) { window.location.href = '/admin'; }
  else { document.getElementById('error').textContent = 'Invalid password'; }
});
</script>"""

_ADMIN_SCRIPT = """<script>
const api = '%(api)s';
const message = document.getElementById('message');

async function send(method, path, body) {
  const res = await fetch(api + path, {
    method,
    headers: {'Content-Type': 'application/json'},
    body: body === undefined ? undefined : JSON.stringify(body),
  });
  const data = await res.json().catch(() => ({}));
  if (!res.ok) { message.textContent = data.detail || 'Request failed'; return false; }
  return true;
}

document.getElementById('upload').addEventListener('submit', async (e) => {
  e.preventDefault();
  const res = await fetch(api + '/upload', {method: 'POST', body: new FormData(e.target)});
  const data = await res.json().catch(() => ({}));
  if (res.ok) { window.location.reload(); }
  else { message.textContent = data.detail || 'Upload failed'; }
});

document.getElementById('logout').addEventListener('click', async () => {
  await fetch(api + '/logout', {method: 'POST'});
  window.location.href = '/login';
});

document.querySelectorAll('button.delete').forEach((btn) => {
  btn.addEventListener('click', async () => {
    if (!confirm('Delete ' + btn.dataset.pathname + '?')) return;
    if (await send('DELETE', '/files', {url: btn.dataset.url})) window.location.reload();
  });
});

document.querySelectorAll('button.rename').forEach((btn) => {
  btn.addEventListener('click', async () => {
    const newPathname = prompt('New path (category/name)', btn.dataset.pathname);
    if (!newPathname || newPathname === btn.dataset.pathname) return;
    if (await send('PATCH', '/files', {url: btn.dataset.url, newPathname})) window.location.reload();
  });
});
</script>"""


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _page(title: str, body: str) -> str:
    return _PAGE.format(title=escape(title), body=body)


def _file_row(record: FileRecord, admin: bool) -> str:
    cells = [
        f'<td><a href="{escape(record.view_route)}">{escape(record.name)}</a></td>',
        f"<td>{format_size(record.size)}</td>",
        f"<td>{record.uploaded_at.strftime('%b %d, %Y')}</td>",
    ]
    if admin:
        cells.insert(1, f"<td><code>{escape(record.pathname)}</code></td>")
        data = f'data-url="{escape(record.url)}" data-pathname="{escape(record.pathname)}"'
        cells.append(
            f'<td><button type="button" class="rename" {data}>Rename</button>'
            f'<button type="button" class="delete" {data}>Delete</button></td>'
        )
    return "<tr>" + "".join(cells) + "</tr>"


def _grouped_tables(catalog: Catalog, admin: bool) -> str:
    if not catalog.files:
        return "<p>No files uploaded yet.</p>"

    sections = []
    for category, files in group_by_category(catalog.files):
        rows = "\n".join(_file_row(record, admin) for record in files)
        heading = escape(category) if category else UNCATEGORIZED_LABEL
        sections.append(f"<section>\n<h2>{heading}</h2>\n<table>\n{rows}\n</table>\n</section>")
    return "\n".join(sections)


def render_index(catalog: Catalog, site_name: str) -> str:
    body = (
        f"<header><h1>{escape(site_name)}</h1>"
        "<p>Public HTML files directory</p></header>\n"
        + _grouped_tables(catalog, admin=False)
    )
    return _page(site_name, body)


def render_admin(catalog: Catalog, site_name: str, api_prefix: str) -> str:
    options = "".join(
        f'<option value="{escape(c)}">{escape(c)}</option>' for c in catalog.categories
    )
    upload_form = (
        '<form id="upload">'
        '<input type="file" name="file" accept=".html,.htm">'
        '<input name="category" list="categories" placeholder="Category (optional)">'
        f'<datalist id="categories">{options}</datalist>'
        '<button type="submit">Upload</button></form>'
    )
    body = (
        f"<header><h1>{escape(site_name)} admin</h1>"
        '<button type="button" id="logout">Log out</button></header>\n'
        f"{upload_form}\n"
        '<p id="message"></p>\n'
        f"<p>{len(catalog.files)} files in {len(catalog.categories)} categories</p>\n"
        + _grouped_tables(catalog, admin=True)
        + "\n"
        + _ADMIN_SCRIPT % {"api": escape(api_prefix)}
    )
    return _page(f"{site_name} admin", body)


def render_login(site_name: str, api_prefix: str) -> str:
    body = (
        f"<h1>{escape(site_name)} login</h1>\n"
        '<form id="login"><input type="password" name="password" placeholder="Password">'
        '<button type="submit">Log in</button></form>\n'
        '<p id="error"></p>\n'
        + _LOGIN_SCRIPT % {"api": escape(api_prefix)}
    )
    return _page("Login", body)
