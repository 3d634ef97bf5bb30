"""Triangle rasterization with depth testing, face culling and Phong shading."""