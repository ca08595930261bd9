"""
Login Page

Static HTML sign-in form. Nothing from the request is interpolated, so no
escaping is needed; only the error banner and the form action vary.
"""

from functools import lru_cache

_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Sign in</title>
  <style>
    body {
      font-family: system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif;
      background: #eef1f4;
      display: flex;
      align-items: center;
      justify-content: center;
      min-height: 100vh;
      margin: 0;
    }
    .panel {
      background: #fff;
      border-radius: 8px;
      box-shadow: 0 1px 10px rgba(0, 0, 0, .12);
      padding: 2rem;
      width: 100%;
      max-width: 320px;
    }
    h1 { font-size: 1.15rem; margin: 0 0 1rem; color: #1d2733; }
    label { display: block; font-size: .8rem; color: #4a5561; margin: .8rem 0 .25rem; }
    input { display: block; width: 100%; box-sizing: border-box; padding: .45rem .6rem;
            border: 1px solid #c5ccd3; border-radius: 4px; font-size: .95rem; }
    button { width: 100%; margin-top: 1.2rem; padding: .55rem; border: 0; border-radius: 4px;
             background: #2d6cdf; color: #fff; font-size: .95rem; cursor: pointer; }
    .error { background: #fdecea; border: 1px solid #f5c2bd; color: #a52a1f;
             border-radius: 4px; padding: .5rem .7rem; font-size: .85rem; margin-bottom: .8rem; }
  </style>
</head>
<body>
  <div class="panel">
    <h1>Sign in</h1>
"""

_ERROR_BANNER = """    <div class="error">Invalid username or password.</div>
"""

_TAIL = """    <form method="post" action="{action}">
      <label for="username">Username</label>
      <input id="username" name="username" type="text" value="admin" autocomplete="username" autofocus>
      <label for="password">Password</label>
      <input id="password" name="password" type="password" autocomplete="current-password">
      <button type="submit">Sign in</button>
    </form>
  </div>
</body>
</html>
"""


@lru_cache(maxsize=8)
def render_login_page(show_error: bool, login_path: str = "/login") -> str:
    """
    Build the login page.

    Args:
        show_error: Include the "invalid username or password" banner
        login_path: Form action; comes from configuration, never the request

    Returns:
        Complete HTML document
    """
    banner = _ERROR_BANNER if show_error else ""
    return _HEAD + banner + _TAIL.format(action=login_path)
