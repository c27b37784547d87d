from setuptools import setup

setup(
    name        = "alphaworld",
    version     = "0.1.0",
    description = "Reader for Minecraft Alpha-format world saves",
    packages    = [ "alphaworld", "alphaworld.mc", "alphaworld.mc.world" ],
    python_requires = ">=3.6",
    zip_safe    = True
)
