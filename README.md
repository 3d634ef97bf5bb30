# pixelforge

A small CPU renderer built on numpy and Pillow. It has two halves that share a framebuffer, colour helpers and post-processing filters:

- `pixelforge.raytrace` is a path tracer. It has spheres, planes, triangles and OBJ meshes, with Lambertian, metal and emissive materials. Rays that miss everything see a sky gradient.
- `pixelforge.raster` is a triangle rasterizer. It has a depth buffer, face culling and per-pixel Phong shading from a point light.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What the package does not do

It does not open a window, show frames on screen or read keyboard and mouse input. It has no command-line program. Rendered images are written to files with `Framebuffer.save`, and Pillow picks the format from the file suffix. It also has no glass or other refracting material.

## Modules

- `pixelforge.color`: the `Rgba` pixel type, `hsv_to_rgb`, `linear_to_gamma`, `to_rgba` (float colour to gamma-corrected 8-bit) and `to_float`. Blend functions are `normal_blend`, `alpha_blend`, `additive_blend` and `multiply_blend`. `set_blend_mode(BlendMode...)` picks the one that `blend` uses. `blend` raises `RuntimeError` until a mode has been set.
- `pixelforge.framebuffer`: `Framebuffer(width, height)` holds pixels and a depth buffer. It draws points, lines (Bresenham with clipping, or `draw_line_slope`), rectangles, triangle outlines, circles and images, and it can `save` to a file. `clear` fills the pixels and resets depth to the far value.
- `pixelforge.postprocess`: filters that change a pixel list in place. They are `invert`, `monochrome`, `color_balance`, `brightness`, `threshold`, `posterize`, `alpha`, `box_blur`, `gaussian_blur`, `sharpen`, `edge`, `emboss` and `emboss_color`.
- `pixelforge.image`: `Image.load(filename)` reads any image Pillow can open, as RGBA.
- `pixelforge.transform`: `Transform(position, rotation, scale)` holds a position, a rotation in degrees (yaw about Y, then pitch about X, then roll about Z) and a scale. It provides `matrix()`, `forward()`, `up()`, `right()` and `apply(vector)`.
- `pixelforge.ray`: `Ray` and `RayHit`.
- `pixelforge.randomness`: a shared generator (`seed`) with random integers, floats, vectors and points in or on the unit sphere.
- `pixelforge.clock`: `Clock` with `tick`, `reset` and `elapsed`.

## Drawing into a framebuffer

```python
from pixelforge.color import Rgba, BlendMode, set_blend_mode
from pixelforge.framebuffer import Framebuffer

set_blend_mode(BlendMode.NORMAL)
fb = Framebuffer(200, 150)
fb.clear(Rgba(0, 0, 0, 255))
fb.draw_line(10, 10, 190, 140, Rgba(255, 255, 255, 255))
fb.draw_circle(100, 75, 40, Rgba(255, 0, 0, 255))
fb.save("shapes.png")
```

## Ray tracing a scene

```python
from pixelforge.color import BlendMode, hsv_to_rgb, set_blend_mode
from pixelforge.framebuffer import Framebuffer
from pixelforge.randomness import seed
from pixelforge.transform import Transform
from pixelforge.raytrace.camera import Camera
from pixelforge.raytrace.material import Emissive, Lambertian, Metal
from pixelforge.raytrace.objects import Plane, Sphere
from pixelforge.raytrace.scene import Scene

set_blend_mode(BlendMode.NORMAL)
seed(1)

fb = Framebuffer(160, 120)
camera = Camera(70.0, fb.width / fb.height)
camera.set_view((0, 0, -10), (0, 0, 0), (0, 1, 0))

scene = Scene()
scene.add(Plane(Transform((0, -2, 0)), Lambertian(hsv_to_rgb(290, 0.2, 0.85))))
scene.add(Sphere(Transform((0, 0, 0)), 1.5, Metal((0.8, 0.6, 0.2), 0.1)))
scene.add(Sphere(Transform((3, 1, 2)), 0.75, Emissive((1.0, 0.9, 0.7), 5.0)))
scene.update()
scene.render(fb, camera, 16, 5)
fb.save("scene.png")
```

`Scene.render` logs the time each scanline took at INFO level through the `logging` module. Call `Scene.update` after you change transforms. It recomputes the world-space vertices of triangles and `Mesh` objects. `Mesh.load` reads the `v` and `f` lines of an OBJ file.

## Rasterizing a model

```python
from pixelforge.color import BlendMode, Rgba, set_blend_mode
from pixelforge.framebuffer import Framebuffer
from pixelforge.transform import Transform
from pixelforge.raster.camera import Camera
from pixelforge.raster.model import Actor, Model
from pixelforge.raster.pipeline import Pipeline
from pixelforge.raster.shading import Light, SurfaceMaterial, Uniforms

set_blend_mode(BlendMode.NORMAL)
fb = Framebuffer(320, 240)
fb.clear(Rgba(0, 0, 0, 255))  # also resets the depth buffer

camera = Camera(fb.width, fb.height)
camera.set_view((0, 0, -50), (0, 0, 0))
camera.set_projection(60.0, fb.width / fb.height, 0.1, 200.0)

uniforms = Uniforms(
    view=camera.view,
    projection=camera.projection,
    light=Light(position=(0, 10, -10), direction=(0, -1, 0), color=(1, 1, 1)),
    ambient=(0.15, 0.02, 0.35),
)
pipeline = Pipeline(fb, uniforms)

model = Model()
model.load("bunny.obj")
actor = Actor(Transform((0, 0, 0), (0, 180, 0), 10), model,
              SurfaceMaterial((0.5, 0.25, 0.75), (1, 1, 1), 8.0))
actor.draw(pipeline)
fb.save("model.png")
```

`Model.load` reads the `v`, `vn` and `f` lines of an OBJ file. A face vertex without a normal gets the normal (1, 1, 1). `Pipeline` takes `front_face` (`FrontFace.CW` or `FrontFace.CCW`, default CCW) and `cull_mode` (`CullMode.FRONT`, `BACK` or `NONE`, default BACK). `rasterize_triangle`, `check_depth` and `write_depth` can also be called directly.