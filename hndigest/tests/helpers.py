# hndigest/tests/helpers.py
import json

from hndigest.storage.models import NewsItem


class FakeResponse:
    def __init__(self, status_code=200, content=b"", text=None):
        self.status_code = status_code
        self.content = content
        self.text = text if text is not None else content.decode("utf-8", errors="replace")


class FakeSession:
    """Stands in for requests.Session: records calls, replays queued responses."""

    def __init__(self, get_responses=None, post_responses=None):
        self.get_responses = list(get_responses or [])
        self.post_responses = list(post_responses or [])
        self.gets = []
        self.posts = []

    def get(self, url, **kwargs):
        self.gets.append((url, kwargs))
        return self.get_responses.pop(0)

    def post(self, url, json=None, **kwargs):
        self.posts.append((url, json, kwargs))
        if self.post_responses:
            return self.post_responses.pop(0)
        return FakeResponse(204)


def rsc_line(item: dict) -> str:
    """One line of an RSC payload with ``item`` embedded the way the site renders it."""
    return f'5:["$","div",null,{{"item": {json.dumps(item, ensure_ascii=False)},"x":1}}]\n'


def make_items(n, start_score=1):
    return [
        NewsItem(id=i, titleJa=f"記事 {i}", url=f"https://example.com/{i}", score=start_score + i)
        for i in range(n)
    ]
