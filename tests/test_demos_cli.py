"""
tests/test_demos_cli.py - Demo scenes and the command line entry point
"""

import pytest

from meshcat_client.demos import demo_scene, point_cloud, primitives, run_demo, run_properties_demo
from meshcat_client.run import apply_overrides, build_parser, main
from meshcat_client.config import Config
from meshcat_client.visualizer import Meshcat


class TestDemoScenes:

    def test_primitives_cover_every_shape(self):
        kinds = {type(lumped.geometries[0].kind).__name__ for _, lumped in primitives()}
        assert len(kinds) == 12

    def test_point_cloud(self):
        data = point_cloud(50, seed=1).to_dict()
        position = data["geometries"][0]["data"]["attributes"]["position"]
        assert len(position["array"]) == 150
        assert data["materials"][0]["type"] == "PointsMaterial"
        assert data["object"]["type"] == "Points"

    def test_demo_scene_parents_first(self):
        paths = [path for path, _ in demo_scene(10)]
        assert paths.index("/boxes") < paths.index("/boxes/child")
        assert len(paths) == len(set(paths))

    def test_run_demo(self, recording_channel):
        meshcat = Meshcat(channel=recording_channel)
        frames_seen = []

        run_demo(meshcat, frames=3, frame_delay=0.0, point_count=10,
                 on_frame=lambda frame, total: frames_seen.append((frame, total)))

        assert frames_seen == [(1, 3), (2, 3), (3, 3)]
        transforms_sent = [c for c in recording_channel.commands if c["type"] == "set_transform"]
        # initial offset plus two boxes per frame
        assert len(transforms_sent) == 1 + 2 * 3
        assert "/boxes/child" in meshcat.scene
        assert "/text" in meshcat.scene

    def test_run_properties_demo(self, recording_channel):
        meshcat = Meshcat(channel=recording_channel)
        run_properties_demo(meshcat, frames=2, frame_delay=0.0)

        properties = [c["property"] for c in recording_channel.commands if c["type"] == "set_property"]
        assert properties[:3] == ["visible", "top_color", "bottom_color"]
        assert properties[3:7] == ["scale", "position", "quaternion", "color"]
        assert len(properties) == 3 + 4 * 2
        assert meshcat.scene.get("/Background").properties["bottom_color"] == [0.6, 0.0, 0.5]


class TestCommandLine:

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_flags_override_config(self):
        args = build_parser().parse_args(
            ["--endpoint", "tcp://1.2.3.4:6000", "--retries", "0", "demo", "--frames", "5"]
        )
        config = apply_overrides(Config(), args)
        assert config.meshcat.endpoint == "tcp://1.2.3.4:6000"
        assert config.meshcat.retries == 0
        assert config.demo.frames == 5
        assert config.meshcat.timeout_ms == Config().meshcat.timeout_ms

    def test_delete(self, fake_server):
        code = main(["--config", "default", "--endpoint", fake_server.endpoint, "--no-footer", "delete", "/foo"])
        assert code == 0
        assert fake_server.commands == [{"path": "/foo", "type": "delete"}]

    def test_properties(self, fake_server):
        code = main([
            "--config", "default", "--endpoint", fake_server.endpoint, "--no-footer",
            "properties", "--frames", "1", "--frame-delay", "0",
        ])
        assert code == 0
        assert fake_server.commands[0]["type"] == "set_object"

    def test_unreachable_server(self, stalled_server):
        code = main([
            "--config", "default", "--endpoint", stalled_server.endpoint,
            "--timeout", "100", "--retries", "0", "--no-footer", "delete", "/foo",
        ])
        assert code == 1

    def test_invalid_path(self, fake_server):
        code = main(["--config", "default", "--endpoint", fake_server.endpoint, "--no-footer", "delete", "foo"])
        assert code == 1
        assert fake_server.commands == []

    def test_missing_urdf(self, fake_server, tmp_path):
        code = main([
            "--config", "default", "--endpoint", fake_server.endpoint, "--no-footer",
            "urdf", str(tmp_path / "missing.urdf"),
        ])
        assert code == 1

    @pytest.mark.parametrize("xml", [
        '<robot name="r"><link name="a"><visual><geometry><box size="1 1"/></geometry></visual></link></robot>',
        '<robot name="r"><link name="a"',
    ])
    def test_malformed_urdf(self, fake_server, tmp_path, capsys, xml):
        path = tmp_path / "bad.urdf"
        path.write_text(xml)

        code = main([
            "--config", "default", "--endpoint", fake_server.endpoint, "--no-footer",
            "urdf", str(path),
        ])

        assert code == 1
        assert "✗" in capsys.readouterr().out
        assert fake_server.commands == []
