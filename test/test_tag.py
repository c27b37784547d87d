import gzip
import os.path
import tempfile
import unittest
from io import BytesIO

import alphaworld

from alphaworld.shared import readLong, writeLong, MAX_DEPTH

from worldfixtures import nestedLists, nestedCompounds

#Uncompressed NBT for: NBTDocument( "hello world", { "name": TAG_String( "Bananrama" ) } )
HELLO_WORLD = (
    b"\x0a\x00\x0bhello world"
    b"\x08\x00\x04name\x00\x09Bananrama"
    b"\x00"
)

class TestShared( unittest.TestCase ):
    def test_longIsBigEndian( self ):
        o = BytesIO()
        writeLong( 1, o )
        self.assertEqual( o.getvalue(), b"\x00\x00\x00\x00\x00\x00\x00\x01" )
        self.assertEqual( readLong( BytesIO( b"\xff" * 8 ) ), -1 )

    def test_shortLongRaisesEOF( self ):
        with self.assertRaises( EOFError ):
            readLong( BytesIO( b"\x00\x00\x00" ) )

class TestTags( unittest.TestCase ):
    def test_intRanges( self ):
        self.assertEqual( alphaworld.TAG_Byte( -128 ), -128 )
        with self.assertRaises( alphaworld.OutOfBoundsError ):
            alphaworld.TAG_Byte( 128 )
        with self.assertRaises( alphaworld.OutOfBoundsError ):
            alphaworld.TAG_Short( -32769 )

    def test_listIsHomogeneous( self ):
        ls = alphaworld.TAG_List( ( 1.0, 2.0 ), alphaworld.TAG_Double )
        self.assertEqual( ls.listTagType, alphaworld.TAG_DOUBLE )
        with self.assertRaises( alphaworld.WrongTagError ):
            alphaworld.TAG_List( ( alphaworld.TAG_Int( 1 ), alphaworld.TAG_String( "a" ) ) )

    def test_emptyListIsTagEnd( self ):
        self.assertEqual( alphaworld.TAG_List().listTagType, alphaworld.TAG_END )

    def test_compoundConvertsValues( self ):
        c = alphaworld.TAG_Compound()
        c["name"] = "Jeff"
        c["child"] = { "bytes": b"\x01\x02" }
        self.assertIsInstance( c["name"], alphaworld.TAG_String )
        self.assertIsInstance( c["child"], alphaworld.TAG_Compound )
        self.assertIsInstance( c["child"]["bytes"], alphaworld.TAG_Byte_Array )
        with self.assertRaises( TypeError ):
            c["number"] = 5

class TestRead( unittest.TestCase ):
    def test_readStream( self ):
        doc = alphaworld.read( BytesIO( HELLO_WORLD ) )
        self.assertEqual( doc.name, "hello world" )
        self.assertEqual( doc["name"], "Bananrama" )
        self.assertIsInstance( doc["name"], alphaworld.TAG_String )

    def test_readGzipFile( self ):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join( d, "hello.nbt" )
            with gzip.open( path, "wb" ) as file:
                file.write( HELLO_WORLD )
            doc = alphaworld.read( path )
        self.assertEqual( doc["name"], "Bananrama" )

    def test_writeThenRead( self ):
        doc = alphaworld.NBTDocument( "root", {
            "long":   alphaworld.TAG_Long( -12345678910111213 ),
            "list":   alphaworld.TAG_List( ( 10.5, -1.25 ), alphaworld.TAG_Float ),
            "ints":   alphaworld.TAG_Int_Array( ( 5, 6, 7, 8 ) ),
            "nested": { "flag": True }
        } )
        with tempfile.TemporaryDirectory() as d:
            for compression in ( None, "gzip", "zlib" ):
                path = os.path.join( d, "doc.nbt" )
                doc.write( path, compression )
                self.assertEqual( alphaworld.read( path, compression ), doc )

    def test_duplicateName( self ):
        data = (
            b"\x0a\x00\x00"
            b"\x01\x00\x01a\x01"
            b"\x01\x00\x01a\x02"
            b"\x00"
        )
        with self.assertRaises( alphaworld.DuplicateNameError ):
            alphaworld.read( BytesIO( data ) )

    def test_rootMustBeCompound( self ):
        with self.assertRaises( alphaworld.WrongTagError ):
            alphaworld.read( BytesIO( b"\x01\x00\x00\x05" ) )

    def test_unknownTagType( self ):
        with self.assertRaises( alphaworld.UnknownTagTypeError ):
            alphaworld.read( BytesIO( b"\x0a\x00\x00\x63\x00\x00" ) )

    def test_truncated( self ):
        with self.assertRaises( EOFError ):
            alphaworld.read( BytesIO( HELLO_WORLD[:-5] ) )

    def test_nestingLimit( self ):
        doc = alphaworld.read( BytesIO( nestedLists( MAX_DEPTH ) ) )
        self.assertEqual( doc["Level"].listTagType, alphaworld.TAG_LIST )
        with self.assertRaises( alphaworld.NestingDepthError ):
            alphaworld.read( BytesIO( nestedLists( MAX_DEPTH + 1 ) ) )

        self.assertIn( "a", alphaworld.read( BytesIO( nestedCompounds( MAX_DEPTH ) ) ) )
        with self.assertRaises( alphaworld.NestingDepthError ):
            alphaworld.read( BytesIO( nestedCompounds( MAX_DEPTH + 1 ) ) )

    def test_deepNestingIsAFormatError( self ):
        with self.assertRaises( alphaworld.NBTFormatError ):
            alphaworld.read( BytesIO( nestedLists( 5000 ) ) )

if __name__ == "__main__":
    unittest.main()
