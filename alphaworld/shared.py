from struct import Struct, error as StructError

#Tag Types
#A TAG_End is a nameless tag that terminates a TAG_Compound. It is also the element type of an empty TAG_List.
TAG_END        = 0
TAG_BYTE       = 1  #1-byte signed integer.
TAG_SHORT      = 2  #2-byte big-endian signed integer.
TAG_INT        = 3  #4-byte big-endian signed integer.
TAG_LONG       = 4  #8-byte big-endian signed integer.
TAG_FLOAT      = 5  #Big-endian binary32.
TAG_DOUBLE     = 6  #Big-endian binary64.
TAG_BYTE_ARRAY = 7  #4-byte signed length, then that many bytes.
TAG_STRING     = 8  #2-byte signed length (in bytes), then that many bytes of UTF-8.
TAG_LIST       = 9  #1-byte element tagType, 4-byte signed length, then that many unnamed payloads.
TAG_COMPOUND   = 10 #Named tags terminated by a TAG_End.
TAG_INT_ARRAY  = 11 #4-byte signed length, then that many 4-byte big-endian signed integers.

#Internal names of tags indexed by tag type
TAG_NAMES = (
    "TAG_End",
    "TAG_Byte",
    "TAG_Short",
    "TAG_Int",
    "TAG_Long",
    "TAG_Float",
    "TAG_Double",
    "TAG_Byte_Array",
    "TAG_String",
    "TAG_List",
    "TAG_Compound",
    "TAG_Int_Array"
)

TAG_COUNT = len( TAG_NAMES )

#Deepest a TAG_List or TAG_Compound may be nested beneath the root compound
MAX_DEPTH = 512

#Structs
_TL = Struct( ">bi" )   #Tag list header
_B  = Struct( ">b"  )   #Signed byte (1 byte)
_S  = Struct( ">h"  )   #Signed big-endian short (2 bytes)
_I  = Struct( ">i"  )   #Signed big-endian int (4 bytes)
_L  = Struct( ">q"  )   #Signed big-endian long (8 bytes)
_F  = Struct( ">f"  )   #Big-endian float (4 bytes)
_D  = Struct( ">d"  )   #Big-endian double (8 bytes)

class NBTFormatError( Exception ):
    """This exception is raised when parsing or writing data that violates the NBT format."""
    pass

class WrongTagError( NBTFormatError ):
    """
    WrongTagError( expected, given )

    Raised when the root tag of a document is not a TAG_Compound, or when a tag of the wrong type is put in a TAG_List.
    """
    def __str__( self ):
        return "Expected {}, but received {} instead.".format( describeTag( self.args[0] ), describeTag( self.args[1] ) )

class DuplicateNameError( NBTFormatError ):
    """
    DuplicateNameError( name )

    Raised when the same name is parsed twice from one TAG_Compound.
    """
    def __str__( self ):
        return "There is already a tag with the name \"{}\" in this TAG_Compound.".format( self.args[0] )

class UnknownTagTypeError( NBTFormatError ):
    """
    UnknownTagTypeError( tagType )

    Raised when a tag with an unrecognized type is parsed or written.
    """
    def __str__( self ):
        return "Unknown or unsupported tag type: {:d}".format( self.args[0] )

class NestingDepthError( NBTFormatError ):
    """
    NestingDepthError( limit )

    Raised when TAG_Lists and TAG_Compounds are parsed nested more than limit levels deep.
    """
    def __str__( self ):
        return "Tags are nested more than {:d} levels deep.".format( self.args[0] )

class OutOfBoundsError( NBTFormatError ):
    """
    OutOfBoundsError( value, min, max )

    Raised when a value lies outside of the range its type can represent,
    or when a length read from a file is negative.
    """
    def __str__( self ):
        return "Value {:d} is outside of expected range [{:d},{:d}].".format( *self.args )

def describeTag( tagType ):
    """
    Returns a short description of a tag type, e.g. "TAG_Compound (10)".
    Returns "Unknown (<tagType>)" for unrecognized types.
    """
    if tagType < 0 or tagType >= TAG_COUNT:
        return "Unknown ({:d})".format( tagType )
    return "{} ({:d})".format( TAG_NAMES[tagType], tagType )

def assertValidTagType( tagType ):
    """Raises UnknownTagTypeError if the given tagType is unrecognized."""
    if tagType < 0 or tagType >= TAG_COUNT:
        raise UnknownTagTypeError( tagType )

def read( i, n ):
    """
    Reads exactly n bytes from i (a readable binary file-like object).
    Raises an EOFError if the end of the file is reached first.
    """
    b = i.read( n )
    if len( b ) != n:
        raise EOFError( "End of file reached prematurely!" )
    return b

def readByte( i ):
    return _B.unpack( read( i, 1 ) )[0]
def writeByte( v, o ):
    o.write( _B.pack( v ) )

def readShort( i ):
    return _S.unpack( read( i, 2 ) )[0]
def writeShort( v, o ):
    o.write( _S.pack( v ) )

def readInt( i ):
    return _I.unpack( read( i, 4 ) )[0]
def writeInt( v, o ):
    o.write( _I.pack( v ) )

def readLong( i ):
    """
    Reads a signed, big-endian, 8-byte integer from the current position of i.
    Besides TAG_Long payloads, this is how session.lock timestamps are read.
    """
    return _L.unpack( read( i, 8 ) )[0]
def writeLong( v, o ):
    """Writes v as a signed, big-endian, 8-byte integer at the current position of o."""
    o.write( _L.pack( v ) )

def readFloat( i ):
    return _F.unpack( read( i, 4 ) )[0]
def writeFloat( v, o ):
    o.write( _F.pack( v ) )

def readDouble( i ):
    return _D.unpack( read( i, 8 ) )[0]
def writeDouble( v, o ):
    o.write( _D.pack( v ) )

def readLength( i ):
    """Reads the 4-byte length that precedes byte arrays, int arrays and lists. Negative lengths raise OutOfBoundsError."""
    l = _I.unpack( read( i, 4 ) )[0]
    if l < 0:
        raise OutOfBoundsError( l, 0, 2147483647 )
    return l

def readString( i ):
    l = _S.unpack( read( i, 2 ) )[0]
    if l < 0:
        raise OutOfBoundsError( l, 0, 32767 )
    return read( i, l ).decode()

def writeString( v, o ):
    b = v.encode()
    try:
        o.write( _S.pack( len( b ) ) )
    except StructError as e:
        raise OutOfBoundsError( len( b ), 0, 32767 ) from e
    o.write( b )

def readTagListHeader( i ):
    """
    Reads a TAG_List header and returns ( tagType, length ).
    Raises UnknownTagTypeError or OutOfBoundsError for invalid headers.
    """
    t, l = _TL.unpack( read( i, 5 ) )
    assertValidTagType( t )
    if l < 0:
        raise OutOfBoundsError( l, 0, 2147483647 )
    return t, l

def writeTagListHeader( t, l, o ):
    o.write( _TL.pack( t, l ) )

def writeTagName( tagType, name, o ):
    """Writes a named tag header: the tag type followed by the name as a TAG_String payload."""
    writeByte( tagType, o )
    writeString( name, o )
