import numpy as np
import pytest

from pixelforge.color import BlendMode, Rgba, set_blend_mode
from pixelforge.framebuffer import Framebuffer
from pixelforge.raster.model import Actor, Model
from pixelforge.raster.pipeline import Pipeline
from pixelforge.raster.shading import Light, SurfaceMaterial, Uniforms, Vertex
from pixelforge.transform import Transform

OBJ = """# test mesh
v 0 0 0
v 1 0 0
v 0 1 0
vn 0 0 1
f 1//1 2//1 3//1
f 3 2 1
"""


def test_load_reads_positions_and_normals(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text(OBJ)
    model = Model()
    model.load(path)
    assert len(model.vertices) == 6
    assert np.allclose(model.vertices[1].position, [1, 0, 0])
    assert np.allclose(model.vertices[0].normal, [0, 0, 1])
    assert np.allclose(model.vertices[3].position, [0, 1, 0])
    assert np.allclose(model.vertices[3].normal, [1, 1, 1])


def test_load_with_texture_index(tmp_path):
    path = tmp_path / "uv.obj"
    path.write_text("v 1 2 3\nvn 0 1 0\nf 1/7/1 1/7/1 1/7/1\n")
    model = Model()
    model.load(path)
    assert len(model.vertices) == 3
    assert np.allclose(model.vertices[2].normal, [0, 1, 0])


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        Model().load(tmp_path / "missing.obj")


def test_bad_index_raises(tmp_path):
    path = tmp_path / "bad.obj"
    path.write_text("v 0 0 0\nf 1 2 3\n")
    with pytest.raises(ValueError):
        Model().load(path)


def _pipeline():
    set_blend_mode(BlendMode.NORMAL)
    framebuffer = Framebuffer(10, 10)
    framebuffer.clear(Rgba(0, 0, 0, 255))
    uniforms = Uniforms(ambient=(1, 1, 1), light=Light(position=(0, 0, 100)))
    return Pipeline(framebuffer, uniforms)


def _front_triangle():
    normal = (0, 0, -1)
    return [
        Vertex((-1, -1, 0), normal),
        Vertex((0, 1, 0), normal),
        Vertex((1, -1, 0), normal),
    ]


def test_model_draw_fills_pixels():
    pipeline = _pipeline()
    Model(_front_triangle()).draw(pipeline)
    assert pipeline.framebuffer.pixels[5 + 5 * 10] == Rgba(255, 255, 255, 255)


def test_actor_sets_uniforms_and_draws():
    pipeline = _pipeline()
    transform = Transform(position=(0.1, 0, 0))
    material = SurfaceMaterial(albedo=(1, 0, 0), specular=0.0)
    actor = Actor(transform, Model(_front_triangle()), material)
    actor.draw(pipeline)
    assert np.allclose(pipeline.uniforms.model, transform.matrix())
    assert np.allclose(pipeline.uniforms.material.albedo, [1, 0, 0])
    assert pipeline.framebuffer.pixels[5 + 5 * 10] == Rgba(255, 0, 0, 255)