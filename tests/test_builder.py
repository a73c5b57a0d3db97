"""Tests for descriptor building and the default deployment pipeline."""

import json
from unittest.mock import Mock

import pytest

from deployer.exceptions import DescriptorError
from deployer.models import MarathonLabel, MarathonUri, TriggerConfig, UpdateResult
from deployer.services.builders.app import MarathonBuilder, deploy, expand_macros


@pytest.fixture
def client():
    client = Mock()
    client.base_url = "http://marathon.local:8080"
    client.update_app.side_effect = lambda app: UpdateResult(
        ok=True, app_id=app.id, status_code=201, deployment_id="d-1"
    )
    return client


class TestExpandMacros:
    def test_braced_and_bare(self):
        env = {"TAG": "v2", "APP": "web"}
        assert expand_macros("registry/${APP}:$TAG", env) == "registry/web:v2"

    def test_unknown_left_as_is(self):
        assert expand_macros("img:${MISSING}-$ALSO", {}) == "img:${MISSING}-$ALSO"

    def test_empty(self):
        assert expand_macros(None, {"A": "1"}) is None
        assert expand_macros("", {"A": "1"}) == ""


class TestMarathonBuilder:
    def test_read_keeps_unknown_fields(self, workspace, client):
        builder = MarathonBuilder(TriggerConfig(url="http://m"), workspace=workspace, client=client)
        builder.read().build()

        data = json.loads(builder.app.to_json())
        assert data["id"] == "/web/app"
        assert data["cpus"] == 0.5
        assert data["instances"] == 2
        assert data["container"]["docker"]["network"] == "BRIDGE"

    def test_overrides_applied(self, workspace, client):
        config = TriggerConfig(
            url="http://m",
            app_id="/web/app-${BRANCH}",
            docker="registry.local/app:${GIT_COMMIT}",
            uris=[MarathonUri(uri="http://files.local/$BUILD_NUMBER.tgz"),
                  MarathonUri(uri="http://files.local/settings.tgz")],
            labels=[MarathonLabel(name="team", value="core"),
                    MarathonLabel(name="build", value="${BUILD_NUMBER}")],
        )
        env = {"BRANCH": "main", "GIT_COMMIT": "abc123", "BUILD_NUMBER": "42"}
        builder = MarathonBuilder(config, env=env, workspace=workspace, client=client)

        app = builder.read().build().app

        assert app.id == "/web/app-main"
        assert app.container.docker.image == "registry.local/app:abc123"
        assert app.uris == ["http://files.local/settings.tgz", "http://files.local/42.tgz"]
        assert app.labels == {"team": "core", "build": "42"}

    def test_docker_section_created(self, tmp_path, client):
        (tmp_path / "marathon.json").write_text('{"id": "/bare", "cmd": "sleep 1"}')
        config = TriggerConfig(url="http://m", docker="busybox:1")

        app = MarathonBuilder(config, workspace=tmp_path, client=client).read().build().app

        assert app.container.type == "DOCKER"
        assert app.container.docker.image == "busybox:1"

    def test_missing_descriptor(self, tmp_path, client):
        builder = MarathonBuilder(TriggerConfig(url="http://m"), workspace=tmp_path, client=client)
        with pytest.raises(DescriptorError) as exc_info:
            builder.read()
        assert exc_info.value.reason == "file not found"

    def test_broken_descriptor(self, tmp_path, client):
        (tmp_path / "marathon.json").write_text("{not json")
        builder = MarathonBuilder(TriggerConfig(url="http://m"), workspace=tmp_path, client=client)
        with pytest.raises(DescriptorError):
            builder.read()

    def test_empty_id_rejected(self, tmp_path, client):
        (tmp_path / "marathon.json").write_text('{"cmd": "sleep 1"}')
        builder = MarathonBuilder(TriggerConfig(url="http://m"), workspace=tmp_path, client=client)
        with pytest.raises(DescriptorError):
            builder.read().build()

    def test_to_file_uses_build_number(self, workspace, client):
        builder = MarathonBuilder(
            TriggerConfig(url="http://m"), env={"BUILD_NUMBER": "9"}, workspace=workspace, client=client
        )
        builder.read().build().to_file()

        assert builder.rendered_path == workspace / "marathon-rendered-9.json"
        assert json.loads(builder.rendered_path.read_text())["id"] == "/web/app"

    def test_to_file_write_failure(self, workspace, client):
        builder = MarathonBuilder(
            TriggerConfig(url="http://m"), env={"BUILD_NUMBER": "nested/7"}, workspace=workspace, client=client
        )
        with pytest.raises(DescriptorError) as exc_info:
            builder.read().build().to_file()
        assert exc_info.value.reason == "cannot write rendered descriptor"
        client.update_app.assert_not_called()

    def test_undecodable_descriptor(self, tmp_path, client):
        (tmp_path / "marathon.json").write_bytes(b'{"id": "/caf\xe9"}')
        builder = MarathonBuilder(TriggerConfig(url="http://m"), workspace=tmp_path, client=client)
        with pytest.raises(DescriptorError) as exc_info:
            builder.read()
        assert exc_info.value.reason == "invalid JSON descriptor"

    def test_to_file_without_build_number(self, workspace, client):
        builder = MarathonBuilder(TriggerConfig(url="http://m"), workspace=workspace, client=client)
        builder.read().build().to_file()
        assert builder.rendered_path == workspace / "marathon-rendered.json"

    def test_update_sends_built_app(self, workspace, client):
        config = TriggerConfig(url="http://m", app_id="/web/other")
        result = MarathonBuilder(config, workspace=workspace, client=client).read().build().update()

        assert result.ok is True
        assert result.deployment_id == "d-1"
        client.update_app.assert_called_once()
        assert client.update_app.call_args.args[0].id == "/web/other"


def test_deploy_end_to_end(workspace, http_server):
    http_server.status = 201
    http_server.payload = {"deploymentId": "5ed4c0c5", "version": "2024-01-01T00:00:00Z"}
    config = TriggerConfig(url=http_server.url, docker="registry.local/app:${TAG}")

    result = deploy(config, {"TAG": "1.2.3", "BUILD_NUMBER": "3"}, workspace)

    assert result.ok is True
    assert result.deployment_id == "5ed4c0c5"
    assert (workspace / "marathon-rendered-3.json").is_file()

    request = http_server.requests[0]
    assert request.method == "PUT"
    assert request.path == "/v2/apps/web/app?force=true"
    assert request.json()["container"]["docker"]["image"] == "registry.local/app:1.2.3"
