"""Shared fixtures for core unit tests"""

import pytest

from pageimport.core.parse import parse


SAMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><meta charset="iso-8859-1"><title>Old site</title></head>
<body>
  <header><small>Menu</small></header>
  <h1>  Annual Report  </h1>
  <small>Posted on Tuesday 15th August 2023 9:58 AM by admin</small>
  <div class="page-content">
    <p style="color:red" paraid="1" paraeid="2">First paragraph.</p>
    <h2 class="title">Details</h2>
    <img src="../../content/images/original/chart%20one.png%3Fv=4613" alt="Chart">
    <ul><li>one</li><li>two</li></ul>
  </div>
</body>
</html>
"""


@pytest.fixture(name="sample_html")
def sample_html_fixture():
    return SAMPLE_HTML


@pytest.fixture(name="sample_tree")
def sample_tree_fixture():
    return parse(SAMPLE_HTML)
