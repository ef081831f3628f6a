import uuid
from urllib.parse import urlencode

import pytest

from blogapp.web import components

pytestmark = pytest.mark.integration

FORM_HEADERS = {"content-type": "application/x-www-form-urlencoded"}


@pytest.mark.asyncio
class TestHomePage:

    async def test_home_shows_heading_and_form(self, harness):
        response = await harness.get("/")

        assert response.status_code == 200
        assert "<h1>Posts</h1>" in response.body
        assert 'name="title"' in response.body
        assert "No posts yet." in response.body

    async def test_submit_then_listed(self, harness):
        """
        Behavior:
            - Submitting the form redirects back to / (303).
            - The new title is then listed with a link to its detail page.

        Importance:
            - Same path the browser scenario walks, without a browser.
        """
        # Act
        created = await harness.post(
            "/posts", urlencode({"title": "New Post", "body": "Blog content"}), headers=FORM_HEADERS
        )
        home = await harness.get("/")

        # Assert
        assert created.status_code == 303
        assert created.headers["location"] == "/"
        assert ">New Post</a>" in home.body
        assert 'href="/posts/' in home.body

    async def test_blank_submission_rerenders_with_422(self, harness):
        response = await harness.post(
            "/posts", urlencode({"title": "  ", "body": "Blog content"}), headers=FORM_HEADERS
        )

        assert response.status_code == 422
        assert "Please fill in: title" in response.body
        assert ">Blog content</textarea>" in response.body

    async def test_overlong_title_gets_length_message(self, harness):
        response = await harness.post(
            "/posts", urlencode({"title": "x" * 201, "body": "Blog content"}), headers=FORM_HEADERS
        )

        assert response.status_code == 422
        assert "Title must be at most 200 characters" in response.body
        assert "Please fill in" not in response.body

    async def test_blank_and_overlong_fields_are_both_reported(self, harness):
        response = await harness.post(
            "/posts", urlencode({"title": "x" * 201, "body": ""}), headers=FORM_HEADERS
        )

        assert response.status_code == 422
        assert "Please fill in: body. Title must be at most 200 characters" in response.body

    async def test_component_failure_shows_fallback(self, harness, monkeypatch):
        """
        Behavior:
            - A component raising while the page renders yields the fallback
              heading with a 200, not a server error.
        """
        def broken(posts):
            raise ValueError("Test error")

        monkeypatch.setattr(components, "post_list", broken)

        response = await harness.get("/")

        assert response.status_code == 200
        assert "Something went wrong." in response.body
        assert "<h1>Posts</h1>" not in response.body


@pytest.mark.asyncio
class TestDetailPage:

    async def test_detail_page(self, harness):
        created = await harness.post("/api/posts", {"title": "New Post", "body": "Blog content"})

        response = await harness.get(f"/posts/{created.body['id']}")

        assert response.status_code == 200
        assert "<h2>New Post</h2>" in response.body
        assert "Blog content" in response.body

    async def test_unknown_post_is_404_page(self, harness):
        response = await harness.get(f"/posts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert "Post not found" in response.body

    async def test_malformed_id_is_404_page(self, harness):
        response = await harness.get("/posts/not-a-post")

        assert response.status_code == 404
        assert "Post not found" in response.body
