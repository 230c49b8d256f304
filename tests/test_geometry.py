"""
tests/test_geometry.py - Geometry, material and texture payloads
"""

import math

import numpy as np
import pytest

from meshcat_client.errors import UnsupportedImageError
from meshcat_client.scene.geometry import (
    BoxGeometry,
    BufferAttribute,
    BufferGeometry,
    CylinderGeometry,
    Geometry,
    MeshFileGeometry,
    RingGeometry,
    SphereGeometry,
    TorusGeometry,
)
from meshcat_client.scene.material import Material, MaterialType
from meshcat_client.scene.texture import Image, Texture
from meshcat_client.utils.meshes import file_extension, load_mesh, scene_text


class TestPrimitives:

    def test_box_fields(self):
        assert BoxGeometry(1.0, 2.0, 3.0).to_dict() == {
            "type": "BoxGeometry", "width": 1.0, "height": 2.0, "depth": 3.0,
        }

    def test_cylinder_uses_camel_case_and_defaults(self):
        data = CylinderGeometry(radius_top=0.2, radius_bottom=0.3, height=0.5).to_dict()
        assert data == {
            "type": "CylinderGeometry",
            "radiusTop": 0.2,
            "radiusBottom": 0.3,
            "height": 0.5,
            "radialSegments": 32,
            "heightSegments": 1,
            "thetaStart": 0.0,
            "thetaLength": 2.0 * math.pi,
        }

    def test_ring_and_torus_field_names(self):
        ring = RingGeometry(inner_radius=0.5, outer_radius=1.0).to_dict()
        assert {"innerRadius", "outerRadius", "thetaSegments", "phiSegments"} <= set(ring)
        torus = TorusGeometry(radius=0.5, tube=0.2).to_dict()
        assert torus["radialSegments"] == 12
        assert torus["tubularSegments"] == 48

    def test_sphere_defaults(self):
        data = SphereGeometry(radius=1.0).to_dict()
        assert (data["widthSegments"], data["heightSegments"]) == (32, 16)

    def test_geometry_adds_uuid_but_not_origin(self):
        geometry = Geometry(BoxGeometry(1.0, 1.0, 1.0))
        data = geometry.to_dict()
        assert data["uuid"] == geometry.uuid
        assert "origin" not in data

    def test_geometries_get_distinct_uuids(self):
        assert Geometry(BoxGeometry(1, 1, 1)).uuid != Geometry(BoxGeometry(1, 1, 1)).uuid


class TestBufferGeometry:

    def test_array_is_flattened_vertex_by_vertex(self):
        points = np.array([[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]])  # two vertices as columns
        data = BufferGeometry.from_points(points).to_dict()

        position = data["data"]["attributes"]["position"]
        assert data["type"] == "BufferGeometry"
        assert position == {
            "itemSize": 3,
            "type": "Float32Array",
            "array": [0.0, 2.0, 4.0, 1.0, 3.0, 5.0],
            "normalized": False,
        }
        assert data["data"]["attributes"]["color"]["array"] == [1.0] * 6
        assert "normal" not in data["data"]["attributes"]

    def test_optional_uv_attribute(self):
        points = np.zeros((3, 2))
        geometry = BufferGeometry(
            position=BufferAttribute(points),
            color=BufferAttribute(points),
            uv=BufferAttribute(np.zeros((2, 2)), item_size=2),
        )
        assert geometry.to_dict()["data"]["attributes"]["uv"]["itemSize"] == 2

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError):
            BufferAttribute(np.zeros((4, 3)))


class TestMaterial:

    def test_default_is_double_sided_phong(self):
        material = Material()
        assert material.to_dict() == {
            "uuid": material.uuid,
            "type": "MeshPhongMaterial",
            "side": 2,
        }

    def test_optional_fields_use_wire_names(self):
        data = Material(color=0x00ff00, vertex_colors=True, wireframe_line_width=2.0).to_dict()
        assert data["color"] == 0x00ff00
        assert data["vertexColors"] is True
        assert data["wireframeLineWidth"] == 2.0
        assert "opacity" not in data

    def test_points_material_carries_size(self):
        data = Material.points(0.001).to_dict()
        assert data["type"] == "PointsMaterial"
        assert data["size"] == 0.001

    def test_points_material_requires_size(self):
        with pytest.raises(ValueError):
            Material(material_type=MaterialType.POINTS)

    def test_color_out_of_range(self):
        with pytest.raises(ValueError):
            Material(color=0x1000000)


class TestTextures:

    def test_text_texture(self):
        texture = Texture.text("Hello, meshcat!", 12, "sans-serif")
        assert texture.to_dict() == {
            "uuid": texture.uuid,
            "type": "_text",
            "text": "Hello, meshcat!",
            "font_size": 12,
            "font_face": "sans-serif",
        }

    def test_image_texture_defaults(self):
        texture = Texture.image()
        assert texture.to_dict() == {
            "uuid": texture.uuid,
            "image": None,
            "repeat": [1, 1],
            "wrap": [1001, 1001],
        }

    def test_png_becomes_data_url(self, tmp_path):
        path = tmp_path / "head.png"
        path.write_bytes(b"\x89PNG\r\n")
        image = Image.from_file(path)
        assert image.url == "data:image/png;base64,iVBORw0K"

    def test_other_image_types_rejected(self, tmp_path):
        path = tmp_path / "head.jpg"
        path.write_bytes(b"jpeg")
        with pytest.raises(UnsupportedImageError):
            Image.from_file(path)

    def test_missing_image(self, tmp_path):
        with pytest.raises(OSError):
            Image.from_file(tmp_path / "missing.png")


class TestMeshFiles:

    def test_file_extension(self):
        assert file_extension("meshes/mesh_0_convex_piece_0.OBJ") == "obj"
        with pytest.raises(ValueError):
            file_extension("meshes/README")

    def test_load_mesh(self, tmp_path):
        path = tmp_path / "tri.obj"
        path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
        mesh = load_mesh(path)
        assert isinstance(mesh, MeshFileGeometry)
        assert mesh.to_dict() == {
            "type": "_meshfile_geometry",
            "format": "obj",
            "data": "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n",
        }

    def test_scene_text(self):
        text = scene_text("Hello")
        data = text.to_dict()
        assert data["geometries"][0]["type"] == "PlaneGeometry"
        assert data["geometries"][0]["width"] == 10.0
        assert data["materials"][0]["transparent"] is True
        assert data["materials"][0]["map"] == text.texture.uuid
        assert data["textures"][0]["text"] == "Hello"
