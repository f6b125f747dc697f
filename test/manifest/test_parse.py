import pytest

from docker_actions.manifest.parse import manifest_reference, parse_sources, parse_tags

pytestmark = [
    pytest.mark.unit,
    pytest.mark.manifest,
]


class TestParseTags:
    @pytest.mark.parametrize(
        "tags,expected",
        [
            pytest.param("1.0.0", ["1.0.0"], id="single"),
            pytest.param("1.0.0,latest", ["1.0.0", "latest"], id="multiple"),
            pytest.param(" 1.0.0 , latest ", ["1.0.0", "latest"], id="whitespace"),
            pytest.param("1.0.0,,latest", ["1.0.0", "", "latest"], id="empty-entry"),
            pytest.param("latest,1.0.0", ["latest", "1.0.0"], id="order"),
        ],
    )
    def test_parse_tags(self, tags, expected):
        assert parse_tags(tags) == expected


class TestParseSources:
    @pytest.mark.parametrize(
        "sources,expected",
        [
            pytest.param("a\nb", ["a", "b"], id="two"),
            pytest.param("a\n\nb\n", ["a", "b"], id="blank-lines"),
            pytest.param("  a  \n  b", ["a", "b"], id="whitespace"),
            pytest.param("a\n   \nb", ["a", "b"], id="whitespace-only-line"),
            pytest.param("a\r\nb\r\n", ["a", "b"], id="crlf"),
            pytest.param("", [], id="empty"),
            pytest.param("\n\n", [], id="only-newlines"),
            pytest.param("a\x0cb\nc", ["a\x0cb", "c"], id="form-feed-not-a-separator"),
            pytest.param("a\u2028b\x85c", ["a\u2028b\x85c"], id="unicode-line-breaks-not-separators"),
        ],
    )
    def test_parse_sources(self, sources, expected):
        assert parse_sources(sources) == expected

    def test_tag_and_digest_references(self):
        """Test tag and digest references are both accepted unchanged"""
        sources = "myorg/myimage:1.0.0-amd64\nmyorg/myimage@sha256:arm64digest"
        assert parse_sources(sources) == ["myorg/myimage:1.0.0-amd64", "myorg/myimage@sha256:arm64digest"]


def test_manifest_reference():
    assert manifest_reference("myorg/myimage", "1.0.0") == "myorg/myimage:1.0.0"
