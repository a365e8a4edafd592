from unittest.mock import MagicMock

import pytest

TITLE_45 = "Acme Widgets - Durable Tools for Every Worker"
DESCRIPTION_140 = "d" * 140


def make_response(status_code=200, text="<html><body>ok</body></html>"):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.apparent_encoding = "utf-8"
    return response


def make_session(response=None, side_effect=None):
    session = MagicMock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response if response is not None else make_response()
    return session


@pytest.fixture
def scenario_a_html():
    """Well-formed page: title 45 chars, description 140 chars, one h1, two h2, all images with alt."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <title>{TITLE_45}</title>
  <meta name="description" content="{DESCRIPTION_140}">
  <meta name="viewport" content="width=device-width, initial-scale=1">
</head>
<body>
  <h1>Durable tools</h1>
  <h2>Hammers</h2>
  <h2>Wrenches</h2>
  <img src="a.png" alt="Hammer">
  <img src="b.png" alt="Wrench">
  <img src="c.png" alt="">
  <p>Our tools last. Buy once and keep them for years.</p>
  <a href="/catalog">Catalog</a>
  <a href="https://partner.example.com">Partner</a>
</body>
</html>"""


@pytest.fixture
def empty_page_html():
    return "<html><head></head><body></body></html>"


@pytest.fixture
def session_factory():
    return make_session


@pytest.fixture
def response_factory():
    return make_response
