import httpx


PROJECT_PAYLOAD = {
    "id": 42,
    "path_with_namespace": "octocat/hello",
    "created_at": "2024-01-01T09:00:00.000Z",
}


def commit_payload(
    count: int, committed_date: str = "2024-01-02T10:00:00.000+00:00"
) -> list[dict[str, object]]:
    return [
        {"id": f"sha{index}", "committed_date": committed_date} for index in range(count)
    ]


def gitlab_transport(
    pages: list[list[dict[str, object]]],
    project: dict[str, object] | None = None,
    requests: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Fake GitLab serving `project` and the given commit pages in order."""

    project_payload = PROJECT_PAYLOAD if project is None else project

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if request.url.path.endswith("/repository/commits"):
            page = int(request.url.params["page"])
            body = pages[page - 1] if page <= len(pages) else []
            return httpx.Response(200, json=body)
        return httpx.Response(200, json=project_payload)

    return httpx.MockTransport(handler)
