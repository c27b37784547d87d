import unittest

import alphaworld

from alphaworld import TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound
from alphaworld.mc.world.decode import decodeMetadata, decodeEntity, decodeEntities, decodeLevel, decodeChunk, decodeItem

from worldfixtures import METADATA, levelDocument, itemCompound, entityCompound, levelCompound, chunkDocument

class TestMetadata( unittest.TestCase ):
    def test_values( self ):
        m = decodeMetadata( levelDocument() )
        self.assertEqual( m, alphaworld.WorldMetadata(
            snowCovered=0, time=100, spawnX=0, spawnY=64, spawnZ=0, lastPlayed=123456789, sizeOnDisk=4096, randomSeed=42
        ) )
        self.assertEqual( m.spawn, ( 0, 64, 0 ) )
        self.assertIs( type( m.randomSeed ), int )

    def test_immutable( self ):
        m = decodeMetadata( levelDocument() )
        with self.assertRaises( AttributeError ):
            m.time = 5
        with self.assertRaises( AttributeError ):
            del m.spawnX

    def test_missingKey( self ):
        for key in METADATA:
            with self.assertRaises( alphaworld.MalformedMetadataError ) as cm:
                decodeMetadata( levelDocument( omit=( key, ) ), "level.dat" )
            self.assertEqual( cm.exception.key, key )
            self.assertIsInstance( cm.exception.__cause__, alphaworld.MissingFieldError )
            self.assertIn( key, str( cm.exception ) )

    def test_wrongType( self ):
        with self.assertRaises( alphaworld.MalformedMetadataError ) as cm:
            decodeMetadata( levelDocument( SpawnY=TAG_Short( 64 ) ) )
        self.assertEqual( cm.exception.key, "SpawnY" )
        self.assertIsInstance( cm.exception.__cause__, alphaworld.UnexpectedFieldTypeError )

    def test_missingData( self ):
        with self.assertRaises( alphaworld.MalformedMetadataError ) as cm:
            decodeMetadata( alphaworld.NBTDocument( "", { "Other": TAG_Compound() } ) )
        self.assertEqual( cm.exception.key, "Data" )

    def test_extraKeysIgnored( self ):
        doc = levelDocument()
        doc["Data"]["Player"] = TAG_Compound( { "Score": TAG_Int( 3 ) } )
        self.assertEqual( decodeMetadata( doc ).randomSeed, 42 )

class TestEntity( unittest.TestCase ):
    def test_required( self ):
        e = decodeEntity( entityCompound() )
        self.assertEqual( e.id, "Pig" )
        self.assertEqual( e.onGround, 1 )
        self.assertEqual( e.air, 300 )
        self.assertEqual( e.fire, -20 )
        self.assertEqual( e.fallDistance, 0.5 )
        self.assertEqual( tuple( e.physics.position ), ( 8.5, 65.0, -3.25 ) )
        self.assertEqual( tuple( e.physics.velocity ), ( 0.0, -0.08, 0.0 ) )
        self.assertIsNone( e.health )
        self.assertIsNone( e.age )
        self.assertIsNone( e.tile )
        self.assertIsNone( e.item )

    def test_rotation( self ):
        #Rotation is stored as [ pitch, yaw ]
        e = decodeEntity( entityCompound( rotation=( 90.0, -15.0 ) ) )
        self.assertEqual( e.physics.euler.yaw,   -15.0 )
        self.assertEqual( e.physics.euler.pitch,  90.0 )
        self.assertEqual( e.physics.euler.roll,   0.0  )

    def test_optional( self ):
        e = decodeEntity( entityCompound( Health=TAG_Short( 20 ), Age=TAG_Short( 1200 ), Tile=TAG_Short( 12 ) ) )
        self.assertEqual( e.health, 20 )
        self.assertEqual( e.age, 1200 )
        self.assertEqual( e.tile, 12 )

    def test_optionalWrongTypeIsAbsent( self ):
        e = decodeEntity( entityCompound( Health=TAG_Int( 20 ), Item=TAG_String( "stone" ) ) )
        self.assertIsNone( e.health )
        self.assertIsNone( e.item )

    def test_item( self ):
        e = decodeEntity( entityCompound( id="Item", Age=TAG_Short( 5 ), Item=itemCompound( 4, 12, 0 ) ) )
        self.assertEqual( e.item, alphaworld.Item( 4, 12, 0 ) )
        self.assertEqual( e.age, 5 )

    def test_incompleteItem( self ):
        item = itemCompound()
        del item["Count"]
        with self.assertRaises( alphaworld.MissingFieldError ) as cm:
            decodeEntity( entityCompound( Item=item ), "Entities[0]" )
        self.assertEqual( cm.exception.field, "Entities[0].Item.Count" )

    def test_missingRequired( self ):
        for key in ( "id", "OnGround", "Air", "Fire", "FallDistance", "Pos", "Motion", "Rotation" ):
            with self.assertRaises( alphaworld.MissingFieldError ) as cm:
                decodeEntity( entityCompound( omit=( key, ) ) )
            self.assertEqual( cm.exception.field, key )

    def test_wrongType( self ):
        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ) as cm:
            decodeEntity( entityCompound( Air=TAG_Int( 300 ) ), "e" )
        self.assertEqual( cm.exception.args, ( "e.Air", alphaworld.TAG_SHORT, alphaworld.TAG_INT ) )

    def test_listShape( self ):
        with self.assertRaises( alphaworld.FieldLengthError ) as cm:
            decodeEntity( entityCompound( pos=( 1.0, 2.0 ) ) )
        self.assertEqual( cm.exception.args, ( "Pos", 3, 2 ) )

        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ) as cm:
            decodeEntity( entityCompound( Motion=TAG_List( ( 0.0, 0.0, 0.0 ), TAG_Float ) ) )
        self.assertEqual( cm.exception.field, "Motion[0]" )

        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ):
            decodeEntity( entityCompound( Rotation=TAG_Float( 0.0 ) ) )

class TestEntities( unittest.TestCase ):
    def test_empty( self ):
        self.assertEqual( decodeEntities( TAG_List() ), [] )
        #Empty lists written by some versions claim TAG_Byte entries
        self.assertEqual( decodeEntities( TAG_List( (), TAG_Byte ) ), [] )

    def test_order( self ):
        ls = TAG_List( ( entityCompound( "Pig" ), entityCompound( "Cow" ), entityCompound( "Sheep" ) ) )
        self.assertEqual( [ e.id for e in decodeEntities( ls ) ], [ "Pig", "Cow", "Sheep" ] )

    def test_notCompounds( self ):
        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ) as cm:
            decodeEntities( TAG_List( ( 1, 2 ), TAG_Int ), "Level.Entities" )
        self.assertEqual( cm.exception.field, "Level.Entities[0]" )

    def test_badEntityNamesIndex( self ):
        ls = TAG_List( ( entityCompound(), entityCompound( omit=( "Fire", ) ) ) )
        with self.assertRaises( alphaworld.MissingFieldError ) as cm:
            decodeEntities( ls, "Level.Entities" )
        self.assertEqual( cm.exception.field, "Level.Entities[1].Fire" )

class TestLevel( unittest.TestCase ):
    def test_values( self ):
        level = decodeLevel( levelCompound( 3, -7, ( entityCompound(), ) ) )
        self.assertEqual( level.xPos, 3 )
        self.assertEqual( level.zPos, -7 )
        self.assertEqual( level.lastUpdate, 1200 )
        self.assertEqual( level.terrainPopulated, 1 )
        self.assertEqual( len( level.entities ), 1 )
        self.assertEqual( len( level.tileEntities ), 0 )

    def test_arrays( self ):
        level = decodeLevel( levelCompound() )
        self.assertIsInstance( level.blocks, bytes )
        self.assertEqual( len( level.blocks ), 32768 )
        self.assertEqual( level.blocks[0], 7 )
        self.assertEqual( len( level.data ), 16384 )
        self.assertEqual( len( level.skyLight ), 16384 )
        self.assertEqual( level.skyLight[0], 0xff )
        self.assertEqual( len( level.blockLight ), 16384 )
        self.assertEqual( len( level.heightMap ), 256 )
        self.assertEqual( level.heightMap[255], 64 )

    def test_zPosReadFromOwnKey( self ):
        level = decodeLevel( levelCompound( 10, 20 ) )
        self.assertEqual( ( level.xPos, level.zPos ), ( 10, 20 ) )

    def test_arrayLength( self ):
        with self.assertRaises( alphaworld.FieldLengthError ) as cm:
            decodeLevel( levelCompound( HeightMap=TAG_Byte_Array( 255 ) ) )
        self.assertEqual( cm.exception.args, ( "Level.HeightMap", 256, 255 ) )

        with self.assertRaises( alphaworld.FieldLengthError ):
            decodeLevel( levelCompound( Blocks=TAG_Byte_Array( 16384 ) ) )

    def test_missing( self ):
        for key in ( "Blocks", "Data", "SkyLight", "HeightMap", "BlockLight", "Entities", "TileEntities", "LastUpdate", "xPos", "zPos", "TerrainPopulated" ):
            with self.assertRaises( alphaworld.MissingFieldError ) as cm:
                decodeLevel( levelCompound( omit=( key, ) ) )
            self.assertEqual( cm.exception.field, "Level." + key )

    def test_wrongType( self ):
        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ):
            decodeLevel( levelCompound( xPos=TAG_Long( 0 ) ) )
        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ):
            decodeLevel( levelCompound( Entities=TAG_Compound() ) )

    def test_tileEntitiesPassedThrough( self ):
        chest = TAG_Compound( { "id": TAG_String( "Chest" ), "x": TAG_Int( 1 ), "y": TAG_Int( 64 ), "z": TAG_Int( 1 ) } )
        level = decodeLevel( levelCompound( TileEntities=TAG_List( ( chest, ) ) ) )
        self.assertIs( level.tileEntities[0], chest )

class TestChunk( unittest.TestCase ):
    def test_chunk( self ):
        c = decodeChunk( chunkDocument( 1, 2, ( entityCompound( "Zombie", Health=TAG_Short( 20 ) ), ) ) )
        self.assertIsInstance( c, alphaworld.Chunk )
        self.assertEqual( ( c.level.xPos, c.level.zPos ), ( 1, 2 ) )
        self.assertEqual( c.level.entities[0].health, 20 )

    def test_missingLevel( self ):
        with self.assertRaises( alphaworld.MissingFieldError ) as cm:
            decodeChunk( alphaworld.NBTDocument( "", { "level": TAG_Compound() } ) )
        self.assertEqual( cm.exception.field, "Level" )

class TestItem( unittest.TestCase ):
    def test_item( self ):
        self.assertEqual( decodeItem( itemCompound( 260, 1, 3 ) ), alphaworld.Item( 260, 1, 3 ) )

    def test_wrongType( self ):
        item = itemCompound()
        item["Count"] = TAG_Short( 1 )
        with self.assertRaises( alphaworld.UnexpectedFieldTypeError ) as cm:
            decodeItem( item )
        self.assertEqual( cm.exception.field, "Item.Count" )

if __name__ == "__main__":
    unittest.main()
