#This module implements the session lock that Alpha-era clients use to claim a world directory.
#
#The convention is peculiar:
#    * To claim a world, a program writes the current time (milliseconds since the unix epoch) to <world>/session.lock
#      as a signed, big-endian, 8-byte integer.
#    * Before touching the world again, it reads the file back. If the timestamp has changed, someone else has claimed the world since
#      and the program must stop.
#Nothing stops two programs from claiming the world at once. The LAST program to claim it owns it, not the first,
#and a program only finds out its claim was lost the next time it checks.
#This module follows the convention as-is so that it interoperates with the clients that wrote these saves.

import os
import time
from logging import getLogger

from alphaworld.shared import readLong as _rl, writeLong as _wl
from alphaworld.mc.world.errors import LockOpenError, LockWriteError, LockReadError, ClockUnavailableError, SessionLockStolenError

log = getLogger( __name__ )

#Lock states
LOCK_UNLOCKED = 0 #Not acquired yet
LOCK_LOCKED   = 1 #Timestamp written, not checked since
LOCK_VERIFIED = 2 #Timestamp read back and still ours
LOCK_STOLEN   = 3 #Timestamp read back and changed; permanent until a new SessionLock is acquired
LOCK_CLOSED   = 4 #File handle released

#Maps LOCK_* enums to names
LOCK_STATE_NAMES = (
    "unlocked",
    "locked",
    "verified",
    "stolen",
    "closed"
)

class SessionLock:
    """
    Holds the session lock of a single world directory.

    Usage:
        with SessionLock( path ) as lock:
            lock.acquire()
            ...
            lock.verify() #raises SessionLockStolenError if another program opened the world
    """
    __slots__ = ( "path", "timestamp", "state", "_clock", "_file" )

    def __init__( self, path, clock=time.time ):
        """
        Constructor. Doesn't touch the file.
        path is the path to the session.lock file.
        clock is an optional callable returning the current time in seconds since the unix epoch. Defaults to time.time.
        """
        self.path      = path
        self.timestamp = None
        self.state     = LOCK_UNLOCKED
        self._clock    = clock
        self._file     = None

    def acquire( self ):
        """
        Claims the world by writing the current time to session.lock.
        The file is opened unbuffered for reading and writing, without being truncated, and stays open until release().
        Returns the timestamp that was written.

        Raises LockOpenError, ClockUnavailableError or LockWriteError; on any of these the file is closed again.
        """
        if self.state != LOCK_UNLOCKED:
            raise RuntimeError( "Session lock has already been acquired." )
        try:
            file = open( self.path, "r+b", buffering=0 )
        except OSError as e:
            raise LockOpenError( self.path ) from e

        try:
            try:
                timestamp = int( self._clock() * 1000 )
            except ( OSError, OverflowError, ValueError ) as e:
                raise ClockUnavailableError() from e
            try:
                file.seek( 0, os.SEEK_SET )
                _wl( timestamp, file )
                file.flush()
            except OSError as e:
                raise LockWriteError( self.path ) from e
        except BaseException:
            file.close()
            raise

        self._file     = file
        self.timestamp = timestamp
        self.state     = LOCK_LOCKED
        log.debug( "Acquired session lock %s at %d", self.path, timestamp )
        return timestamp

    def verify( self ):
        """
        Checks that session.lock still holds the timestamp written by acquire().
        Raises SessionLockStolenError if it doesn't, and on every call after that.
        Raises LockReadError if the timestamp can't be read.
        """
        state = self.state
        if state == LOCK_STOLEN:
            raise SessionLockStolenError( self.path, self.timestamp, None )
        if state != LOCK_LOCKED and state != LOCK_VERIFIED:
            raise RuntimeError( "Session lock is {}.".format( LOCK_STATE_NAMES[ state ] ) )

        file = self._file
        try:
            file.seek( 0, os.SEEK_SET )
            found = _rl( file )
        except ( OSError, EOFError ) as e:
            raise LockReadError( self.path ) from e

        if found != self.timestamp:
            self.state = LOCK_STOLEN
            log.warning( "Session lock %s was taken by another program (ours: %d, found: %d)", self.path, self.timestamp, found )
            raise SessionLockStolenError( self.path, self.timestamp, found )
        self.state = LOCK_VERIFIED

    def release( self ):
        """
        Closes session.lock. The timestamp in the file is left as-is for the next program to contest.
        Calling release() more than once does nothing.
        """
        file = self._file
        self._file = None
        self.state = LOCK_CLOSED
        if file is not None:
            file.close()
            log.debug( "Released session lock %s", self.path )

    def isStolen( self ):
        """Returns True if a previous verify() found the lock taken by another program."""
        return self.state == LOCK_STOLEN

    def __enter__( self ):
        return self

    def __exit__( self, exc_type, exc_value, traceback ):
        """Releases the lock after exiting a with block."""
        self.release()

    def __repr__( self ):
        return "SessionLock('{}', {})".format( self.path, LOCK_STATE_NAMES[ self.state ] )
