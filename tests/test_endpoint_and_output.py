import argparse
import io
import json
from unittest.mock import MagicMock

import httpx
import pytest

from flaggraph.core.exceptions import FlagError, ResponseError
from flaggraph.flags.client import ClientFlag
from flaggraph.flags.endpoint import EndpointFlag
from flaggraph.flags.output import OutputFlag


def _endpoint(payload=None, prefix="/api"):
    http_client = MagicMock(spec=httpx.Client)

    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    http_client.request.return_value = response

    endpoint = EndpointFlag(client=ClientFlag(client=http_client), prefix=prefix)
    endpoint.process()
    return endpoint, http_client, response


def test_request_goes_through_shared_client():
    endpoint, http_client, _ = _endpoint({"ok": True})

    assert endpoint.request("GET", "about") == {"ok": True}
    http_client.request.assert_called_once_with("GET", "/api/about")


@pytest.mark.parametrize(
    "prefix, expected",
    [("/api", "/api/vms"), ("rest/v2/", "/rest/v2/vms"), ("", "/vms"), ("/", "/vms")],
)
def test_prefix_is_normalised(prefix, expected):
    endpoint, http_client, _ = _endpoint([], prefix=prefix)

    endpoint.request("GET", "/vms")

    http_client.request.assert_called_once_with("GET", expected)


def test_prefix_from_environment(monkeypatch):
    monkeypatch.setenv("FLAGGRAPH_API_PREFIX", "/rest")
    endpoint = EndpointFlag()
    parser = argparse.ArgumentParser()
    endpoint.register(parser)

    parser.parse_args([])
    endpoint.process()

    assert endpoint.path("vms") == "/rest/vms"


def test_request_raises_on_http_error():
    endpoint, _, response = _endpoint()
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "boom",
        request=MagicMock(),
        response=MagicMock(status_code=500),
    )

    with pytest.raises(httpx.HTTPStatusError):
        endpoint.request("GET", "about")


def test_request_raises_response_error_on_bad_json():
    endpoint, _, response = _endpoint()
    response.json.side_effect = ValueError("not json")
    response.status_code = 200
    response.headers = {"content-type": "text/html"}
    response.text = "<html>"

    with pytest.raises(ResponseError, match="text/html"):
        endpoint.request("GET", "about")


def test_request_needs_processed_client():
    with pytest.raises(FlagError, match="not been processed"):
        EndpointFlag(client=ClientFlag()).request("GET", "about")


def test_output_plain_dict_lines():
    stream = io.StringIO()

    OutputFlag(stream=stream).write({"name": "srv", "version": "1.0"})

    assert stream.getvalue().splitlines() == ["name:    srv", "version: 1.0"]


def test_output_json_switch():
    stream = io.StringIO()
    flag = OutputFlag(stream=stream)
    parser = argparse.ArgumentParser()
    flag.register(parser)

    parser.parse_args(["--json"])
    flag.write({"b": 1, "a": [1, 2]})

    assert flag.as_json is True
    assert json.loads(stream.getvalue()) == {"a": [1, 2], "b": 1}


def test_output_list_and_scalar():
    stream = io.StringIO()
    flag = OutputFlag(stream=stream)

    flag.write(["vm-1", "vm-2"])
    flag.write("done")

    assert stream.getvalue() == "vm-1\nvm-2\ndone\n"
