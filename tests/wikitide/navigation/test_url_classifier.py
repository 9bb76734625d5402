import pytest

from wikitide.config import WikiConfig
from wikitide.models import LinkClass, NavigationAction
from wikitide.navigation import UrlClassifier

pytestmark = pytest.mark.unit


@pytest.fixture
def classifier() -> UrlClassifier:
    return UrlClassifier.from_config(WikiConfig())


@pytest.fixture
def strict_classifier() -> UrlClassifier:
    return UrlClassifier.from_config(WikiConfig(strict_host_matching=True))


class TestClassify:

    @pytest.mark.parametrize("url", [
        "https://meta.wikitide.org/wiki/Stewards",
        "https://meta.wikitide.org/w/index.php?title=Main_Page",
        "https://login.wikitide.org/wiki/Special:UserLogin",
        "https://example.wikitide.com/wiki/Foo",
        "https://static.wikiforge.net/metawiki/logo.png",
        "https://wikiforge.net/",
    ])
    def test_wiki_family_is_internal(self, classifier: UrlClassifier, url: str):
        assert classifier.classify(url) is LinkClass.INTERNAL
        assert not classifier.is_external(url)

    @pytest.mark.parametrize("url", [
        "https://www.mediawiki.org/wiki/Help:Contents",
        "https://github.com/",
        "mailto:someone@example.org",
        "http://meta.wikitide.net/wiki/Foo",
    ])
    def test_other_urls_are_external(self, classifier: UrlClassifier, url: str):
        assert classifier.classify(url) is LinkClass.EXTERNAL

    def test_substring_match_anywhere_in_url(self, classifier: UrlClassifier):
        # Host names are matched as text, so a mention in the query is enough.
        assert classifier.classify("https://evil.example/?next=wikitide.org") is LinkClass.INTERNAL

    def test_strict_mode_compares_hosts(self, strict_classifier: UrlClassifier):
        assert strict_classifier.classify("https://evil.example/?next=wikitide.org") is LinkClass.EXTERNAL
        assert strict_classifier.classify("https://notwikitide.org/") is LinkClass.EXTERNAL
        assert strict_classifier.classify("https://META.wikitide.org/wiki/X") is LinkClass.INTERNAL
        assert strict_classifier.classify("https://static.wikiforge.net/x.png") is LinkClass.INTERNAL
        assert strict_classifier.classify("https://wikitide.org") is LinkClass.INTERNAL
        assert strict_classifier.classify("not a url") is LinkClass.EXTERNAL

    def test_primary_url_alone_is_internal(self):
        classifier = UrlClassifier("https://wiki.example.net", internal_hosts=[])
        assert classifier.classify("https://wiki.example.net/wiki/A") is LinkClass.INTERNAL
        assert classifier.classify("https://other.example.net/wiki/A") is LinkClass.EXTERNAL


class TestRewrite:

    def test_appends_skin_and_safemode(self, classifier: UrlClassifier):
        url = "https://meta.wikitide.org/wiki/Stewards"
        assert classifier.rewrite_for_skin(url) == \
            "https://meta.wikitide.org/wiki/Stewards?useskin=vector-2022&safemode=1"

    def test_rewrite_extends_existing_query(self, classifier: UrlClassifier):
        url = "https://meta.wikitide.org/w/index.php?title=Home"
        assert classifier.rewrite_for_skin(url) == \
            "https://meta.wikitide.org/w/index.php?title=Home&useskin=vector-2022&safemode=1"

    def test_rewrite_is_idempotent(self, classifier: UrlClassifier):
        once = classifier.rewrite_for_skin("https://meta.wikitide.org/wiki/Stewards")
        assert classifier.rewrite_for_skin(once) == once

    def test_other_skin_still_gets_app_skin(self, classifier: UrlClassifier):
        url = "https://meta.wikitide.org/wiki/A?useskin=monobook"
        assert classifier.rewrite_for_skin(url).endswith("useskin=monobook&useskin=vector-2022&safemode=1")


class TestIntercept:

    def test_external_is_not_rewritten(self, classifier: UrlClassifier):
        decision = classifier.intercept("https://github.com/")
        assert decision.action is NavigationAction.EXTERNAL
        assert decision.url == "https://github.com/"
        assert decision.intercepted

    def test_untagged_internal_is_replaced(self, classifier: UrlClassifier):
        decision = classifier.intercept("https://meta.wikitide.org/wiki/Stewards")
        assert decision.action is NavigationAction.REPLACE
        assert decision.url == "https://meta.wikitide.org/wiki/Stewards?useskin=vector-2022&safemode=1"
        assert decision.scale_hint is None

    def test_tagged_internal_is_allowed(self, classifier: UrlClassifier):
        url = "https://meta.wikitide.org/wiki/Stewards?useskin=vector-2022&safemode=1"
        decision = classifier.intercept(url)
        assert decision.action is NavigationAction.ALLOW
        assert decision.url == url
        assert not decision.intercepted

    def test_static_host_carries_scale_hint(self, classifier: UrlClassifier):
        decision = classifier.intercept("https://static.wikiforge.net/metawiki/a/ab/Diagram.svg")
        assert decision.action is NavigationAction.REPLACE
        assert decision.scale_hint is not None
        assert decision.scale_hint.initial_scale == 30
        assert decision.scale_hint.use_wide_viewport
        assert decision.scale_hint.load_with_overview_mode

    def test_custom_skin_and_scale(self):
        classifier = UrlClassifier.from_config(WikiConfig(skin="timeless", initial_scale=50))
        decision = classifier.intercept("https://static.wikiforge.net/x.png?useskin=timeless")
        assert decision.action is NavigationAction.ALLOW
        assert decision.scale_hint.initial_scale == 50


def test_strict_mode_uses_configured_primary_host():
    config = WikiConfig(wiki_url="https://Wiki.Example.net", internal_hosts=[], strict_host_matching=True)
    classifier = UrlClassifier.from_config(config)

    assert classifier.primary_host == config.primary_host == "wiki.example.net"
    assert classifier.classify("https://wiki.example.net/wiki/A") is LinkClass.INTERNAL
    assert classifier.classify("https://example.net/?to=wiki.example.net") is LinkClass.EXTERNAL
