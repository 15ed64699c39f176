import pytest

from lnextract import ExtractError, fragment_text, sanitize_fragment


def test_fragment_text_skips_markup_scripts_and_comments():
    html = '<p>Tom &amp; Jerry<br>ran  off<script>x()</script><!-- c --></p>'
    assert fragment_text(html) == 'Tom & Jerry ran off'


def test_fragment_text_removes_bidi_controls():
    assert fragment_text('<h4>\u200fVolume\u00ad 1</h4>') == 'Volume 1'


def test_fragment_text_treats_hard_spaces_as_spaces():
    assert fragment_text('<p>a&nbsp;&nbsp;b\u202fc</p>') == 'a b c'


def test_sanitize_minimal_profile():
    html = '<div class="entry-content"><script>alert(1)</script><p onclick="x()">Hi <font>there</font></p><img src="a.png"/></div>'
    out = sanitize_fragment(html)
    assert '<script' not in out and 'onclick' not in out
    assert '<p>Hi there</p>' in out
    assert '<div class="entry-content">' in out
    assert '<img' not in out


def test_sanitize_images_profile_keeps_img():
    out = sanitize_fragment('<p><img src="a.png" alt="A" onerror="x()"/></p>', profile='images')
    assert '<img' in out and 'src="a.png"' in out and 'alt="A"' in out
    assert 'onerror' not in out


def test_sanitize_unknown_profile():
    with pytest.raises(ExtractError):
        sanitize_fragment('<p>a</p>', profile='kindle')
