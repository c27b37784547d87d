#Exceptions raised while opening Alpha worlds, holding their session lock, and decoding their files.
#Like the NBT errors in alphaworld.shared, each exception keeps its details in args and formats them in __str__.

from alphaworld.shared import describeTag

class WorldError( Exception ):
    """Base class for every error raised by alphaworld.mc.world."""
    pass

class WorldNotFoundError( WorldError ):
    """
    WorldNotFoundError( path )

    Raised when a world directory does not exist.
    """
    def __str__( self ):
        return "World directory \"{}\" does not exist.".format( self.args[0] )

class NotAWorldDirectoryError( WorldNotFoundError ):
    """
    NotAWorldDirectoryError( path )

    Raised when the path given for a world exists but is not a directory.
    """
    def __str__( self ):
        return "\"{}\" is not a directory.".format( self.args[0] )

class WorldDirectoryReadError( WorldError ):
    """
    WorldDirectoryReadError( path )

    Raised when the contents of a world directory can't be listed (e.g. for lack of permission).
    The underlying OSError is available as __cause__.
    """
    def __str__( self ):
        return "Could not read the contents of world directory \"{}\".".format( self.args[0] )

class MissingMetadataFileError( WorldError ):
    """
    MissingMetadataFileError( path )

    Raised when a world directory has no level.dat file.
    """
    def __str__( self ):
        return "World \"{}\" is missing level.dat.".format( self.args[0] )

class MissingLockFileError( WorldError ):
    """
    MissingLockFileError( path )

    Raised when a world directory has no session.lock file.
    """
    def __str__( self ):
        return "World \"{}\" is missing session.lock.".format( self.args[0] )

class SessionLockError( WorldError ):
    """Base class for failures of the session lock."""
    pass

class LockOpenError( SessionLockError ):
    """
    LockOpenError( path )

    Raised when session.lock cannot be opened for reading and writing.
    """
    def __str__( self ):
        return "Could not open session lock \"{}\".".format( self.args[0] )

class LockWriteError( SessionLockError ):
    """
    LockWriteError( path )

    Raised when our timestamp cannot be written to session.lock.
    """
    def __str__( self ):
        return "Could not write timestamp to session lock \"{}\".".format( self.args[0] )

class LockReadError( SessionLockError ):
    """
    LockReadError( path )

    Raised when the timestamp cannot be read back from session.lock.
    """
    def __str__( self ):
        return "Could not read timestamp from session lock \"{}\".".format( self.args[0] )

class ClockUnavailableError( SessionLockError ):
    """Raised when the current time can't be determined while taking the session lock."""
    def __str__( self ):
        return "Could not get the current time."

class SessionLockStolenError( SessionLockError ):
    """
    SessionLockStolenError( path, ours, theirs )

    Raised when session.lock no longer holds the timestamp we wrote, meaning another program has opened the world since.
    Once raised, the world must be re-opened before any more chunks can be loaded.
    theirs is None if the theft was detected by an earlier check.
    """
    def __str__( self ):
        path, ours, theirs = self.args
        if theirs is None:
            return "Session lock \"{}\" was taken by another program.".format( path )
        return "Session lock \"{}\" was taken by another program (expected timestamp {:d}, found {:d}).".format( path, ours, theirs )

class FieldError( WorldError ):
    """Base class for a field of a decoded NBT tree that doesn't match the expected shape."""
    def getField( self ):
        """Returns the name of the offending field."""
        return self.args[0]
    field = property( getField )

class MissingFieldError( FieldError ):
    """
    MissingFieldError( field, expected )

    Raised when a required field is absent. expected is the tagType the field should have had.
    """
    def __str__( self ):
        return "Missing required field \"{}\" ({}).".format( self.args[0], describeTag( self.args[1] ) )

class UnexpectedFieldTypeError( FieldError ):
    """
    UnexpectedFieldTypeError( field, expected, actual )

    Raised when a field (or an entry of a list field) has a different tagType than expected.
    actual is None when the value isn't a tag at all.
    """
    def __str__( self ):
        field, expected, actual = self.args
        return "Field \"{}\" should be {}, but is {}.".format(
            field,
            describeTag( expected ),
            "not a tag" if actual is None else describeTag( actual )
        )

class FieldLengthError( FieldError ):
    """
    FieldLengthError( field, expected, actual )

    Raised when a fixed-length byte array or list field has the wrong number of entries.
    """
    def __str__( self ):
        return "Field \"{}\" should have {:d} entries, but has {:d}.".format( *self.args )

class MalformedMetadataError( WorldError ):
    """
    MalformedMetadataError( key, path=None )

    Raised when level.dat can't be read, or its "Data" compound is missing a key or has a key of the wrong type.
    key names the bad key, and is None when the file itself couldn't be read.
    path is the level.dat file, if known.
    The underlying error is available as __cause__.
    """
    def getKey( self ):
        return self.args[0]
    key = property( getKey )

    def __str__( self ):
        key  = self.args[0]
        path = self.args[1] if len( self.args ) > 1 else None
        where = "" if path is None else " \"{}\"".format( path )
        if key is None:
            return "Could not read level data{}.".format( where )
        return "Malformed level data{}: bad or missing \"{}\".".format( where, key )

class ChunkNotFoundError( WorldError ):
    """
    ChunkNotFoundError( x, z, path )

    Raised when the file for the chunk at (x, z) does not exist.
    """
    def __str__( self ):
        return "Chunk ({:d}, {:d}) does not exist (no file at \"{}\").".format( *self.args )

class ChunkDecodeError( WorldError ):
    """
    ChunkDecodeError( x, z, path )

    Raised when the file for the chunk at (x, z) can't be parsed or decoded.
    The underlying error (an NBTFormatError, EOFError, OSError, or FieldError) is available as __cause__.
    """
    def __str__( self ):
        return "Could not load chunk ({:d}, {:d}) from \"{}\".".format( *self.args )
