#This module contains the World class for the Alpha level format.
#Alpha was used by Minecraft from Infdev (June 2010) until Beta 1.3 (February 22, 2011), when it was replaced by the Region format.
#
#An Alpha world directory looks like this:
#    <world>/level.dat           gzip-compressed NBT; world-level metadata in a "Data" compound
#    <world>/session.lock        8-byte timestamp of the program that last opened the world (see alphaworld.mc.world.lock)
#    <world>/<a>/<b>/c.<x>.<z>.dat  gzip-compressed NBT; one file per chunk (see alphaworld.mc.world.coords)
#
#Read more about the format here:
#    http://www.minecraftwiki.net/wiki/Alpha_Level_Format

import os
import os.path
import time
import zlib
from logging import getLogger

from alphaworld                 import tag
from alphaworld.shared          import NBTFormatError
from alphaworld.mc.world.coords import chunkKey, splitChunkKey, chunkPath
from alphaworld.mc.world.decode import decodeMetadata, decodeChunk
from alphaworld.mc.world.lock   import SessionLock
from alphaworld.mc.world.errors import (
    WorldNotFoundError, NotAWorldDirectoryError, WorldDirectoryReadError, MissingMetadataFileError, MissingLockFileError,
    MalformedMetadataError, ChunkNotFoundError, ChunkDecodeError, FieldError
)

log = getLogger( __name__ )

LEVEL_DAT    = "level.dat"
SESSION_LOCK = "session.lock"

#Errors tag.read() can raise for a file that exists but is corrupt
_READ_ERRORS = ( NBTFormatError, EOFError, OSError, zlib.error, UnicodeDecodeError )

class World:
    """
    Represents an Alpha world directory.

    A World is bound to a path when constructed, but nothing on disk is touched until open() is called.
    open() claims the world's session lock and reads level.dat. Chunks are then read on demand with loadChunk() and cached for
    as long as the World is alive; they are never evicted.

    Only one caller should use a World at a time. If it's shared between threads, guard it with a lock of your own.

    Example:
        with alphaworld.openWorld( "saves/World1" ) as world:
            print( world.metadata.spawn )
            chunk = world.loadChunk( 0, 0 )
    """
    __slots__ = ( "path", "compression", "metadata", "chunks", "_clock", "_lock" )

    def __init__( self, path, compression="gzip", clock=time.time ):
        """
        Constructor.
        path is the path to the world's directory.
        compression is the compression used by level.dat and the chunk files: None, "gzip", or "zlib". Defaults to "gzip".
        clock is passed to the SessionLock and is only useful for testing.
        """
        self.path        = path
        self.compression = compression
        self.metadata    = None #WorldMetadata, set by open()
        self.chunks      = {}   #chunkKey( x, z ) -> Chunk
        self._clock      = clock
        self._lock       = None

    def verifyFormat( self ):
        """
        Checks that path is a directory containing both level.dat and session.lock as regular files.
        Raises WorldNotFoundError, NotAWorldDirectoryError, WorldDirectoryReadError, MissingMetadataFileError or MissingLockFileError.

        This only looks; nothing is created or modified, so it's safe to call on a world another program has open.
        """
        path = self.path
        if not os.path.exists( path ):
            raise WorldNotFoundError( path )
        if not os.path.isdir( path ):
            raise NotAWorldDirectoryError( path )

        hasLevelDat = hasSessionLock = False
        try:
            with os.scandir( path ) as entries:
                for entry in entries:
                    if entry.is_file( follow_symlinks=False ):
                        if entry.name == LEVEL_DAT:
                            hasLevelDat = True
                        elif entry.name == SESSION_LOCK:
                            hasSessionLock = True
        except OSError as e:
            raise WorldDirectoryReadError( path ) from e

        if not hasLevelDat:
            raise MissingMetadataFileError( path )
        if not hasSessionLock:
            raise MissingLockFileError( path )

    def open( self ):
        """
        Verifies the directory, claims the session lock, and reads level.dat into metadata.
        If anything fails after the lock has been claimed, the lock file is closed before the error is raised.
        Returns self.
        """
        if self._lock is not None:
            raise RuntimeError( "World is already open." )
        self.verifyFormat()

        lock = SessionLock( os.path.join( self.path, SESSION_LOCK ), self._clock )
        lock.acquire()
        try:
            self.metadata = self._readMetadata()
        except BaseException:
            lock.release()
            raise

        self._lock  = lock
        self.chunks = {}
        log.info( "Opened world %s", self.path )
        return self

    def _readMetadata( self ):
        path = os.path.join( self.path, LEVEL_DAT )
        try:
            root = tag.read( path, self.compression )
        except _READ_ERRORS as e:
            raise MalformedMetadataError( None, path ) from e
        return decodeMetadata( root, path )

    def close( self ):
        """Releases the session lock. Loaded chunks stay available. Calling close() more than once does nothing."""
        lock = self._lock
        if lock is not None:
            self._lock = None
            lock.release()
            log.info( "Closed world %s", self.path )

    def flush( self ):
        """Writing changes back to disk is not supported; this always raises NotImplementedError."""
        raise NotImplementedError( "Saving Alpha worlds is not supported." )

    def isOpen( self ):
        return self._lock is not None

    def verifyLock( self ):
        """
        Checks that no other program has claimed the world since it was opened.
        Raises SessionLockStolenError if one has; after that, chunks can't be loaded until the world is re-opened.
        """
        if self._lock is None:
            raise RuntimeError( "World is not open." )
        self._lock.verify()

    def getChunkPath( self, x, z ):
        """Returns the path to the file for the chunk with chunk coordinates (x, z)."""
        return os.path.join( self.path, chunkPath( x, z ) )

    def getChunk( self, x, z ):
        """Returns the already loaded chunk at (x, z), or None if it hasn't been loaded. Never reads from disk."""
        return self.chunks.get( chunkKey( x, z ) )

    def loadChunk( self, x, z ):
        """
        Returns the chunk with chunk coordinates (x, z), reading it from disk the first time it's requested.

        The session lock is checked on every call, even when the chunk is already loaded.
        Raises SessionLockStolenError if another program has claimed the world,
        ChunkNotFoundError if there's no file for this chunk,
        or ChunkDecodeError if the file can't be parsed or doesn't hold a valid chunk (the cause is chained as __cause__).
        """
        self.verifyLock()

        key = chunkKey( x, z )
        c = self.chunks.get( key )
        if c is not None:
            return c

        path = self.getChunkPath( x, z )
        try:
            root = tag.read( path, self.compression )
        except FileNotFoundError as e:
            raise ChunkNotFoundError( x, z, path ) from e
        except _READ_ERRORS as e:
            raise ChunkDecodeError( x, z, path ) from e

        try:
            c = decodeChunk( root )
        except FieldError as e:
            raise ChunkDecodeError( x, z, path ) from e

        self.chunks[key] = c
        log.debug( "Loaded chunk (%d, %d) from %s", x, z, path )
        return c

    def iterChunks( self ):
        """Iterates over loaded chunks, yielding ( x, z, chunk ) for each."""
        for key, c in list( self.chunks.items() ):
            x, z = splitChunkKey( key )
            yield x, z, c

    def __enter__( self ):
        if self._lock is None:
            self.open()
        return self

    def __exit__( self, exc_type, exc_value, traceback ):
        """Closes the world after exiting a with block."""
        self.close()

    #Handles world[x,z]. Equivalent to world.loadChunk( x, z ).
    def __getitem__( self, index ):
        return self.loadChunk( *index )

    def __repr__( self ):
        return "World('{}')".format( self.path )
