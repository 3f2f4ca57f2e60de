"""Tests for the GitHub client and its typed models."""

from unittest.mock import Mock

import pytest

from conftest import API, link, make_response
from ghpager.errors import GistFileNotFound, ParseError, ProtocolError, TransportError
from ghpager.github import GitHubClient
from ghpager.models import Gist, Organization, Repository, User
from ghpager.pagination import Pagination


@pytest.fixture
def client():
    client = GitHubClient(token="test_token")
    client.session.get = Mock()
    return client


def user_json(login, id):
    return {"login": login, "id": id, "type": "User", "html_url": f"https://github.com/{login}"}


class TestGitHubClient:
    """Test the GitHubClient class."""

    def test_client_initialization(self):
        client = GitHubClient(token="test_token")
        assert client.session.headers["Authorization"] == "token test_token"
        assert client.session.headers["Accept"] == "application/vnd.github.v3+json"
        assert client.session.headers["User-Agent"].startswith("ghpager/")
        assert client.base_url == API
        assert client.per_page == 100
        assert client.fetcher.timeout == 30.0
        assert client.fetcher.session is client.session

    def test_anonymous_client(self):
        assert "Authorization" not in GitHubClient().session.headers

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        monkeypatch.setenv("GHPAGER_PER_PAGE", "25")
        monkeypatch.setenv("GHPAGER_TIMEOUT", "2.5")

        client = GitHubClient()
        assert client.base_url == "https://ghe.example.com/api/v3"
        assert client.per_page == 25
        assert client.fetcher.timeout == 2.5

    def test_base_url_without_scheme(self):
        client = GitHubClient(base_url="api.github.com")
        with pytest.raises(TransportError):
            client.get_followers("octocat")

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("GHPAGER_PER_PAGE", "25")
        client = GitHubClient(base_url="https://ghe.example.com/api/v3", per_page=5, timeout=1)
        assert client.base_url == "https://ghe.example.com/api/v3"
        assert client.per_page == 5
        assert client.fetcher.timeout == 1

    @pytest.mark.parametrize(
        "method, args, uri",
        [
            ("get_followers", ("octocat",), f"{API}/users/octocat/followers?per_page=100"),
            ("get_following", ("octocat",), f"{API}/users/octocat/following?per_page=100"),
            ("get_stargazers", ("octocat", "hello"), f"{API}/repos/octocat/hello/stargazers?per_page=100"),
            ("get_repositories", ("octocat",), f"{API}/users/octocat/repos?type=owner&per_page=100"),
            ("get_organizations", ("octocat",), f"{API}/users/octocat/orgs?per_page=100"),
            ("get_gists", ("octocat",), f"{API}/users/octocat/gists?per_page=100"),
        ],
    )
    def test_listing_entry_points(self, client, method, args, uri):
        """Test that listings are lazy and start from the right URI."""
        pagination = getattr(client, method)(*args)

        assert isinstance(pagination, Pagination)
        assert str(pagination) == uri
        client.session.get.assert_not_called()

    def test_followers_across_pages(self, client):
        client.session.get.side_effect = [
            make_response(
                [user_json("a", 1), user_json("b", 2)],
                headers=link(f"{API}/user/1/followers?per_page=100&page=2"),
            ),
            make_response([user_json("c", 3)]),
        ]

        followers = list(client.get_followers("octocat"))

        assert [u.login for u in followers] == ["a", "b", "c"]
        assert followers[0] == User(login="a", id=1, type="User", html_url="https://github.com/a")
        assert client.session.get.call_count == 2

    def test_listing_is_restartable(self, client):
        client.session.get.side_effect = lambda *a, **kw: make_response([user_json("a", 1)])
        followers = client.get_followers("octocat")

        assert list(followers) == list(followers)
        assert client.session.get.call_count == 2

    def test_get_user(self, client):
        client.session.get.return_value = make_response(user_json("octocat", 583231))
        assert client.get_user("octocat") == User("octocat", 583231, "User", "https://github.com/octocat")
        assert client.session.get.call_args.args[0] == f"{API}/users/octocat"

    def test_get_organization(self, client):
        client.session.get.return_value = make_response({"login": "github", "id": 1, "description": "How people build software."})
        org = client.get_organization("github")
        assert org.login == "github"
        assert org.description == "How people build software."

    def test_get_user_not_found(self, client):
        client.session.get.return_value = make_response({"message": "Not Found"}, status=404)
        with pytest.raises(ProtocolError) as exc_info:
            client.get_user("nobody")
        assert exc_info.value.status == 404

    def test_get_gist(self, client):
        client.session.get.return_value = make_response(
            {"id": "aa5a315d", "description": "hi", "public": True, "files": {"hello": {}, "world": {}}}
        )
        assert client.get_gist("aa5a315d") == Gist(id="aa5a315d", description="hi", public=True, files=("hello", "world"))

    def test_read_gist_file(self, client):
        client.session.get.side_effect = [
            make_response({"id": "test", "files": {"hello": {"raw_url": "https://gist.test/raw/hello"}}}),
            make_response(b"success!"),
        ]

        assert client.read_gist_file("test", "hello") == "success!"
        assert client.session.get.call_args_list[1].args[0] == "https://gist.test/raw/hello"

    def test_read_missing_gist_file(self, client):
        client.session.get.return_value = make_response({"id": "test", "files": {"hello": {"raw_url": "x"}}})
        with pytest.raises(GistFileNotFound) as exc_info:
            client.read_gist_file("test", "nope")
        assert exc_info.value.name == "nope"


class TestModels:
    """Test mapping raw JSON objects to typed values."""

    def test_repository_owner_from_object(self):
        repo = Repository.from_json(
            {"name": "hello", "full_name": "octocat/hello", "owner": {"login": "octocat"}, "stargazers_count": 80}
        )
        assert repo == Repository("hello", "octocat/hello", "octocat", 80, False)

    def test_repository_owner_from_full_name(self):
        repo = Repository.from_json({"name": "hello", "full_name": "octocat/hello"})
        assert repo.owner == "octocat"
        assert repo.stargazers_count == 0

    def test_user_defaults(self):
        assert User.from_json({"login": "a", "id": 1}) == User("a", 1, "User", "")

    def test_missing_required_field(self):
        with pytest.raises(ParseError, match="login"):
            User.from_json({"id": 1})

    def test_organization_optional_fields(self):
        assert Organization.from_json({"login": "o", "id": 2}) == Organization("o", 2, None, "")

    def test_gist_without_files(self):
        assert Gist.from_json({"id": "g"}).files == ()
