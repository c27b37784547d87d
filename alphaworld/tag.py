"""
alphaworld's tag module provides a DOM-style view of NBT documents: the untyped tagged tree that level.dat and chunk files decode to.

NBTDocument, the TAG_* classes and the read() function are implemented here.
"""
import gzip
import sys
import zlib

from collections import OrderedDict
from array import array
from io import BytesIO

from alphaworld.shared import (
    WrongTagError, DuplicateNameError, OutOfBoundsError, UnknownTagTypeError, NestingDepthError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY,
    TAG_NAMES, MAX_DEPTH,

    writeTagName        as _wtn,  writeByte         as _wb,   writeShort          as _ws,
    writeInt            as _wi,   writeLong         as _wl,   writeFloat          as _wf,
    writeDouble         as _wd,   writeString       as _wst,  writeTagListHeader  as _wlh,

    readByte            as _rb,   readShort         as _rs,   readInt             as _ri,
    readLong            as _rl,   readFloat         as _rf,   readDouble          as _rd,
    readString          as _rst,  readTagListHeader as _rlh,  readLength          as _rln,
    read                as _r,

    assertValidTagType  as _avtt
)

_od_setitem = OrderedDict.__setitem__
_LITTLE     = sys.byteorder == "little"

#Returns the depth of a container nested inside one at the given depth.
def _nest( depth ):
    depth += 1
    if depth > MAX_DEPTH:
        raise NestingDepthError( MAX_DEPTH )
    return depth

class _BaseTag:
    """Base class for all alphaworld tag classes."""
    tagType = -1

    __slots__ = ()

    def _w( self, o ):
        """Write this tag's payload to the given writable file-like object, o."""
        raise NotImplementedError()
    def _r( i ):
        """Read a payload of this tag's type from the given readable file-like object, i."""
        raise NotImplementedError()

class _BaseIntTag( int, _BaseTag ):
    """
    Base class for the integral tags (TAG_Byte, TAG_Short, TAG_Int, TAG_Long).
    Construction raises OutOfBoundsError if the value does not fit in the tag's [min, max] range.
    """
    __slots__ = ()

    min =  1
    max = -1

    def __repr__( self ):
        return "{}({:d})".format( self.__class__.__name__, self )

#Returns a class for an integral tag with the given tagType and inclusive range, read with r and written with w.
def _makeIntPrimitiveClass( classname, tt, vmin, vmax, r, w ):
    class _IntPrimitiveTag( _BaseIntTag ):
        __slots__ = ()
        tagType = tt
        min = vmin
        max = vmax
        def __init__( self, value=0 ):
            #int.__new__ has already produced self; only the range remains to be checked.
            if self < vmin or self > vmax:
                raise OutOfBoundsError( self, vmin, vmax )
        def _w( self, o ):
            w( self, o )
    def _read( i ):
        return _IntPrimitiveTag( r( i ) )
    _IntPrimitiveTag._r = staticmethod( _read )
    _IntPrimitiveTag.__name__ = classname
    _IntPrimitiveTag.__qualname__ = classname
    _IntPrimitiveTag.__doc__ = "Represents a {0:}. {0:} is an int subclass.".format( classname )
    return _IntPrimitiveTag

TAG_Byte  = _makeIntPrimitiveClass( "TAG_Byte",  TAG_BYTE,                  -128,                 127, _rb, _wb )
TAG_Short = _makeIntPrimitiveClass( "TAG_Short", TAG_SHORT,               -32768,               32767, _rs, _ws )
TAG_Int   = _makeIntPrimitiveClass( "TAG_Int",   TAG_INT,            -2147483648,          2147483647, _ri, _wi )
TAG_Long  = _makeIntPrimitiveClass( "TAG_Long",  TAG_LONG,  -9223372036854775808, 9223372036854775807, _rl, _wl )

class TAG_Float( float, _BaseTag ):
    """Represents a TAG_Float. TAG_Float is a float subclass; values are rounded to binary32 when written."""
    tagType = TAG_FLOAT
    __slots__ = ()
    def __repr__( self ):
        return "TAG_Float({!r})".format( float( self ) )
    def _r( i ):
        return TAG_Float( _rf( i ) )
    def _w( self, o ):
        _wf( self, o )

class TAG_Double( float, _BaseTag ):
    """Represents a TAG_Double. TAG_Double is a float subclass."""
    tagType = TAG_DOUBLE
    __slots__ = ()
    def __repr__( self ):
        return "TAG_Double({!r})".format( float( self ) )
    def _r( i ):
        return TAG_Double( _rd( i ) )
    def _w( self, o ):
        _wd( self, o )

class TAG_Byte_Array( bytearray, _BaseTag ):
    """
    Represents a TAG_Byte_Array. TAG_Byte_Array is a bytearray subclass.
    Values are unsigned [0,255] in Python; the NBT format does not specify the signedness of these bytes.
    """
    tagType = TAG_BYTE_ARRAY
    __slots__ = ()
    def __repr__( self ):
        l = len( self )
        return "TAG_Byte_Array([{:d} byte{}])".format( l, "s" if l != 1 else "" )
    def _r( i ):
        return TAG_Byte_Array( _r( i, _rln( i ) ) )
    def _w( self, o ):
        _wi( len( self ), o )
        o.write( self )

class TAG_String( str, _BaseTag ):
    """Represents a TAG_String. TAG_String is a str subclass; it may not be longer than 32767 bytes when UTF-8 encoded."""
    tagType = TAG_STRING
    __slots__ = ()
    def __init__( self, *args, **kwargs ):
        l = len( self.encode() )
        if l > 32767:
            raise OutOfBoundsError( l, 0, 32767 )
    def __repr__( self ):
        return "TAG_String({})".format( str.__repr__( self ) )
    def _r( i ):
        return TAG_String( _rst( i ) )
    def _w( self, o ):
        _wst( self, o )

class TAG_Int_Array( array, _BaseTag ):
    """Represents a TAG_Int_Array: an array of signed 4-byte integers."""
    tagType = TAG_INT_ARRAY
    __slots__ = ()
    def __new__( cls, *args ):
        return array.__new__( cls, "i", *args )
    def __repr__( self ):
        return "TAG_Int_Array({})".format( list( self ) )
    def _r( i ):
        tag = TAG_Int_Array()
        tag.frombytes( _r( i, 4 * _rln( i ) ) )
        if _LITTLE:
            tag.byteswap()
        return tag
    def _w( self, o ):
        _wi( len( self ), o )
        a = array( "i", self )
        if _LITTLE:
            a.byteswap()
        o.write( a.tobytes() )

class TAG_List( list, _BaseTag ):
    """
    Represents a TAG_List: a list subclass whose entries are all tags of one type, listTagType.
    An empty TAG_List has a listTagType of TAG_END unless one is given.
    """
    tagType = TAG_LIST
    __slots__ = "listTagType"

    def __init__( self, iterable=(), listTagType=None ):
        """
        iterable provides the initial entries. Non-tag values are converted with _toTag().
        listTagType is an optional tag class (e.g. TAG_Double) that the entries are converted to.
            If it is None, the type of the first entry is used.
        """
        super().__init__()
        t = TAG_END if listTagType is None else listTagType.tagType
        for v in iterable:
            if listTagType is not None and not isinstance( v, listTagType ):
                v = listTagType( v )
            v = _toTag( v )
            if len( self ) == 0 and listTagType is None:
                t = v.tagType
            elif v.tagType != t:
                raise WrongTagError( t, v.tagType )
            list.append( self, v )
        self.listTagType = t

    def __repr__( self ):
        return "TAG_List({}, {})".format( TAG_NAMES[ self.listTagType ], list.__repr__( self ) )

    def _r( i, depth=0 ):
        t, l = _rlh( i )
        tag = TAG_List()
        tag.listTagType = t
        if l > 0:
            #Only an empty list may claim TAG_End as its element type.
            if t == TAG_END:
                raise UnknownTagTypeError( TAG_END )
            c = _TAGCLASS[t]
            if t == TAG_LIST or t == TAG_COMPOUND:
                d = _nest( depth )
                for _ in range( l ):
                    list.append( tag, c._r( i, d ) )
            else:
                for _ in range( l ):
                    list.append( tag, c._r( i ) )
        return tag

    def _w( self, o ):
        _wlh( self.listTagType, len( self ), o )
        for t in self:
            t._w( o )

class TAG_Compound( OrderedDict, _BaseTag ):
    """
    Represents a TAG_Compound: an OrderedDict subclass mapping str names to tags.
    Non-tag values assigned to it are converted with _toTag().
    """
    tagType = TAG_COMPOUND

    def __setitem__( self, key, value ):
        if not isinstance( key, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )
        _od_setitem( self, key, _toTag( value ) )

    def _r( i, depth=0 ):
        """Reads a compound's payload. depth is how deeply it is nested beneath the root compound."""
        tag = TAG_Compound()
        tt = _rb( i )
        while tt != TAG_END:
            _avtt( tt )
            name = _rst( i )
            if name in tag:
                raise DuplicateNameError( name )
            if tt == TAG_LIST or tt == TAG_COMPOUND:
                value = _TAGCLASS[tt]._r( i, _nest( depth ) )
            else:
                value = _TAGCLASS[tt]._r( i )
            _od_setitem( tag, name, value )
            tt = _rb( i )
        return tag

    def _w( self, o ):
        for n,t in self.items():
            _wtn( t.tagType, n, o )
            t._w( o )
        o.write( b"\0" )

class NBTDocument( TAG_Compound ):
    """
    Represents an NBT document: a named TAG_Compound at the root of an NBT file.
    The name is usually the empty string, "".
    """
    def __init__( self, name="", *args, **kwargs ):
        """
        NBTDocument()                  -> empty document named ""
        NBTDocument( name )            -> empty document with the given name
        NBTDocument( name, mapping )   -> document with the given name, initialized from mapping
        """
        super().__init__( *args, **kwargs )
        self.name = name

    def write( self, target, compression="gzip" ):
        """
        Writes this document to target.
        target can be the path of a file (as a str) or a writable binary file-like object.
        compression can be None, "gzip", or "zlib" and only applies when target is a path. Defaults to "gzip".
        """
        if not isinstance( target, str ):
            self._w( target )
            return
        if compression is None:
            with open( target, "wb" ) as file:
                self._w( file )
        elif compression == "gzip":
            with gzip.open( target, "wb" ) as file:
                self._w( file )
        elif compression == "zlib":
            with BytesIO() as file:
                self._w( file )
                with open( target, "wb" ) as hardfile:
                    hardfile.write( zlib.compress( file.getbuffer() ) )
        else:
            raise ValueError( "Unknown compression type \"{}\".".format( compression ) )

    def _r( i ):
        tt = _rb( i )
        if tt != TAG_COMPOUND:
            raise WrongTagError( TAG_COMPOUND, tt )
        name = _rst( i )
        tag = TAG_Compound._r( i )
        doc = NBTDocument( name )
        doc.update( tag )
        return doc

    def _w( self, o ):
        _wtn( TAG_COMPOUND, self.name, o )
        super()._w( o )

    def __repr__( self ):
        return "NBTDocument({!r}, {})".format( self.name, dict( self ) )

#Tuple of tag classes indexed by tagType.
_TAGCLASS = (
    None,           #TAG_END
    TAG_Byte,       #TAG_BYTE
    TAG_Short,      #TAG_SHORT
    TAG_Int,        #TAG_INT
    TAG_Long,       #TAG_LONG
    TAG_Float,      #TAG_FLOAT
    TAG_Double,     #TAG_DOUBLE
    TAG_Byte_Array, #TAG_BYTE_ARRAY
    TAG_String,     #TAG_STRING
    TAG_List,       #TAG_LIST
    TAG_Compound,   #TAG_COMPOUND
    TAG_Int_Array   #TAG_INT_ARRAY
)

#Mapping of python types -> tag classes.
#int and float are deliberately absent: a bare 5 could be any of four integral tags.
_TAGMAP = {
    bool:        TAG_Byte,
    bytes:       TAG_Byte_Array,
    bytearray:   TAG_Byte_Array,
    str:         TAG_String,
    list:        TAG_List,
    tuple:       TAG_List,
    dict:        TAG_Compound,
    OrderedDict: TAG_Compound
}

def _toTag( value ):
    """Returns value if it is already a tag, otherwise converts it to the tag class mapped to its Python type."""
    if isinstance( value, _BaseTag ):
        return value
    c = _TAGMAP.get( value.__class__ )
    if c is None:
        raise TypeError( "Unable to convert value of type \"{}\" to a tag.".format( value.__class__.__name__ ) )
    return c( value )

def read( source, compression="gzip" ):
    """
    Parses an NBT file from source and returns an NBTDocument.

    source can be the path of the file to read from (as a str), or a readable binary file-like object containing uncompressed NBT data.
    compression is an optional parameter that can be None, "gzip", or "zlib", and only applies when source is a path. Defaults to "gzip".

    Raises FileNotFoundError if source is a path that doesn't exist,
    NBTFormatError subclasses or EOFError if the data is malformed,
    and OSError if the file can't be read or decompressed.
    """
    if not isinstance( source, str ):
        return NBTDocument._r( source )
    if compression is None:
        file = open( source, "rb" )
    elif compression == "gzip":
        file = gzip.open( source, "rb" )
    elif compression == "zlib":
        with open( source, "rb" ) as hardfile:
            file = BytesIO( zlib.decompress( hardfile.read() ) )
    else:
        raise ValueError( "Unknown compression type \"{}\".".format( compression ) )
    with file:
        return NBTDocument._r( file )
