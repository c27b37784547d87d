"""
alphaworld's world module opens Minecraft worlds saved in the Alpha level format, holds their session lock,
and decodes level.dat and chunk files into typed objects.
"""
import os
import os.path

from alphaworld.mc.world.alpha  import LEVEL_DAT, SESSION_LOCK, World
from alphaworld.mc.world.errors import WorldError

def openWorld( path, compression="gzip" ):
    """
    Opens the Alpha world in the given directory and returns it as a World.
    This claims the world's session lock: any other program that has the world open will find its lock stolen.
    Use the returned World in a with block, or call world.close() when done.

    See help( alphaworld.World.open ) for the exceptions this can raise.
    """
    return World( os.path.abspath( path ), compression ).open()

def iterWorlds( savedir ):
    """
    Iterates over every Alpha world in savedir, a directory containing world directories.
    Yields unopened World objects; checking a directory doesn't modify it.
    Directories that don't look like worlds (see help( alphaworld.World.verifyFormat )) are skipped.
    """
    with os.scandir( savedir ) as entries:
        paths = sorted( e.path for e in entries if e.is_dir() )
    for path in paths:
        world = World( path )
        try:
            world.verifyFormat()
        except WorldError:
            continue
        yield world
