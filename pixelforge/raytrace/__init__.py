"""Path tracing of spheres, planes, triangles and OBJ meshes."""