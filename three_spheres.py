from ExampleSceneDef import ThreeSpheresExample
from cli import render

example = ThreeSpheresExample(width=320, height=180)

render(example.tracer, "three_spheres.png")
