#This module maps chunk coordinates to cache keys and to chunk file paths.
#
#In the Alpha level format every chunk is stored in its own file, spread across a two-level tree of directories:
#    <world>/<shard x>/<shard z>/c.<x>.<z>.dat
#The shards and the coordinates in the filename are written in base 36 (digits 0-9 then lowercase a-z).
#For example, chunk (35, -1) lives in "<world>/z/1/c.z.-1.dat".
#Negative coordinates are sharded with 64 - n rather than a floored modulo; see shardOf().
#
#Read more about the format here:
#    http://www.minecraftwiki.net/wiki/Alpha_Level_Format

import os.path

from alphaworld.shared import OutOfBoundsError

#Number of shard directories per axis
SHARD_COUNT = 64

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

INT32_MIN = -2147483648
INT32_MAX =  2147483647

def _assertInt32( n ):
    if n < INT32_MIN or n > INT32_MAX:
        raise OutOfBoundsError( n, INT32_MIN, INT32_MAX )

def chunkKey( x, z ):
    """
    Returns a single int that identifies the chunk at (x, z).
    x and z are expected to be signed 32-bit integers; OutOfBoundsError is raised otherwise.

    The two's complement bit patterns of z and x are packed into the high and low halves of a 64-bit value,
    so distinct coordinates always give distinct keys. Keys are only used in memory and are never written to disk.
    """
    _assertInt32( x )
    _assertInt32( z )
    return ( ( z & 0xFFFFFFFF ) << 32 ) | ( x & 0xFFFFFFFF )

def splitChunkKey( key ):
    """Inverse of chunkKey(). Returns the ( x, z ) coordinates packed into key."""
    x = key & 0xFFFFFFFF
    z = ( key >> 32 ) & 0xFFFFFFFF
    if x > INT32_MAX:
        x -= 0x100000000
    if z > INT32_MAX:
        z -= 0x100000000
    return x, z

def toBase36( n ):
    """
    Returns n written in base 36: lowercase digits, a leading "-" for negative numbers, and no leading zeros.
    e.g. 35 -> "z", 36 -> "10", -37 -> "-11", 0 -> "0"
    """
    if n == 0:
        return "0"
    sign = ""
    if n < 0:
        sign = "-"
        n = -n
    digits = []
    while n:
        n, d = divmod( n, 36 )
        digits.append( BASE36_DIGITS[d] )
    return sign + "".join( reversed( digits ) )

def shardOf( n ):
    """
    Returns the shard (an int in [0, 63]) that chunk coordinate n is filed under.

    Note: negative coordinates are first replaced with 64 - n, so -1 is filed under 1 rather than 63.
    This reproduces the sharding of the legacy reader whose saves this package targets, and differs from a floored modulo
    (which other tools, e.g. pymclevel, use) for every negative coordinate that isn't a multiple of 64.
    """
    if n < 0:
        n = SHARD_COUNT - n
    return n % SHARD_COUNT

def chunkPath( x, z ):
    """
    Returns the path of the file for chunk (x, z), relative to the world directory.
    e.g. chunkPath( 5, 5 ) == os.path.join( "5", "5", "c.5.5.dat" )
    x and z are expected to be signed 32-bit integers; OutOfBoundsError is raised otherwise.
    """
    _assertInt32( x )
    _assertInt32( z )
    return os.path.join(
        toBase36( shardOf( x ) ),
        toBase36( shardOf( z ) ),
        "c.{}.{}.dat".format( toBase36( x ), toBase36( z ) )
    )
