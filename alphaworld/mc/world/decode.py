"""
Projects the untyped NBT trees read from level.dat and chunk files onto the typed model in alphaworld.mc.world.model.

Each record is described by a table of ( NBT key, attribute, tag class ) rows.
Required fields must be present and have exactly the listed tag type; otherwise a FieldError subclass is raised naming the field
by its path within the file (e.g. "Level.Entities[2].Pos").
Optional fields are only set when present with the listed tag type.
"""
from logging import getLogger

from alphaworld.shared import TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING
from alphaworld.tag import TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound
from alphaworld.mc.world.errors import FieldError, MissingFieldError, UnexpectedFieldTypeError, FieldLengthError, MalformedMetadataError
from alphaworld.mc.world.model import WorldMetadata, Chunk, Level, Entity, Item, Physics, Position, Velocity, Euler

log = getLogger( __name__ )

#level.dat, "Data" compound
METADATA_FIELDS = (
    ( "SnowCovered", "snowCovered", TAG_Byte  ),
    ( "Time",        "time",        TAG_Long  ),
    ( "SpawnX",      "spawnX",      TAG_Int   ),
    ( "SpawnY",      "spawnY",      TAG_Int   ),
    ( "SpawnZ",      "spawnZ",      TAG_Int   ),
    ( "LastPlayed",  "lastPlayed",  TAG_Long  ),
    ( "SizeOnDisk",  "sizeOnDisk",  TAG_Long  ),
    ( "RandomSeed",  "randomSeed",  TAG_Long  )
)

#Chunk "Level" compound: byte arrays and their lengths for a 16x128x16 chunk
BLOCKS_LENGTH    = 32768 #1 byte per block
NIBBLES_LENGTH   = 16384 #1 nibble per block
HEIGHTMAP_LENGTH = 256   #1 byte per column

LEVEL_ARRAYS = (
    ( "Blocks",     "blocks",     BLOCKS_LENGTH    ),
    ( "Data",       "data",       NIBBLES_LENGTH   ),
    ( "SkyLight",   "skyLight",   NIBBLES_LENGTH   ),
    ( "HeightMap",  "heightMap",  HEIGHTMAP_LENGTH ),
    ( "BlockLight", "blockLight", NIBBLES_LENGTH   )
)

#Chunk "Level" compound: scalars
LEVEL_FIELDS = (
    ( "LastUpdate",       "lastUpdate",       TAG_Long ),
    ( "xPos",             "xPos",             TAG_Int  ),
    ( "zPos",             "zPos",             TAG_Int  ),
    ( "TerrainPopulated", "terrainPopulated", TAG_Byte )
)

#Entity compound, required scalars. Pos, Motion and Rotation are lists and are handled separately.
ENTITY_FIELDS = (
    ( "id",           "id",           TAG_String ),
    ( "OnGround",     "onGround",     TAG_Byte   ),
    ( "Air",          "air",          TAG_Short  ),
    ( "Fire",         "fire",         TAG_Short  ),
    ( "FallDistance", "fallDistance", TAG_Float  )
)

#Entity compound, optional scalars. Only some kinds of entities have these (e.g. mobs have Health, dropped items have Age).
ENTITY_OPTIONAL_FIELDS = (
    ( "Health", "health", TAG_Short ),
    ( "Age",    "age",    TAG_Short ),
    ( "Tile",   "tile",   TAG_Short )
)

#Item compound carried by dropped item entities
ITEM_FIELDS = (
    ( "id",     "id",     TAG_Short ),
    ( "Count",  "count",  TAG_Byte  ),
    ( "Damage", "damage", TAG_Short )
)

#Converts tag payloads to plain Python values, indexed by tagType
_NATIVE = {
    TAG_BYTE:       int,
    TAG_SHORT:      int,
    TAG_INT:        int,
    TAG_LONG:       int,
    TAG_FLOAT:      float,
    TAG_DOUBLE:     float,
    TAG_BYTE_ARRAY: bytes,
    TAG_STRING:     str
}

def _tagType( value ):
    """Returns the tagType of value, or None if value isn't a tag."""
    return getattr( value, "tagType", None )

def _label( prefix, name ):
    return name if prefix == "" else prefix + "." + name

def requireTag( compound, name, tagClass, prefix="" ):
    """
    Returns compound[name].
    Raises MissingFieldError if it isn't there, or UnexpectedFieldTypeError if it isn't a tagClass.
    prefix is prepended to name in error messages.
    """
    value = compound.get( name )
    if value is None:
        raise MissingFieldError( _label( prefix, name ), tagClass.tagType )
    t = _tagType( value )
    if t != tagClass.tagType:
        raise UnexpectedFieldTypeError( _label( prefix, name ), tagClass.tagType, t )
    return value

def optionalTag( compound, name, tagClass, prefix="" ):
    """
    Returns compound[name] if it is present and is a tagClass, otherwise None.
    A value of some other type is ignored (and logged) rather than treated as an error.
    """
    value = compound.get( name )
    if value is None:
        return None
    t = _tagType( value )
    if t != tagClass.tagType:
        log.debug( "Ignoring optional field %s: expected tag type %s, found %s", _label( prefix, name ), tagClass.tagType, t )
        return None
    return value

def requireList( compound, name, tagClass, length, prefix="" ):
    """
    Returns compound[name], which must be a TAG_List of exactly length tagClass entries.
    Raises FieldLengthError for the wrong number of entries and UnexpectedFieldTypeError for the wrong entry type.
    """
    ls = requireTag( compound, name, TAG_List, prefix )
    if len( ls ) != length:
        raise FieldLengthError( _label( prefix, name ), length, len( ls ) )
    for i, v in enumerate( ls ):
        t = _tagType( v )
        if t != tagClass.tagType:
            raise UnexpectedFieldTypeError( "{}[{:d}]".format( _label( prefix, name ), i ), tagClass.tagType, t )
    return ls

def _decodeFields( compound, fields, prefix ):
    """Returns a dict of attribute -> plain value for each required ( key, attribute, tagClass ) row of fields."""
    values = {}
    for key, attr, tagClass in fields:
        values[attr] = _NATIVE[ tagClass.tagType ]( requireTag( compound, key, tagClass, prefix ) )
    return values

def decodeMetadata( root, path=None ):
    """
    Returns the WorldMetadata stored in root, the NBTDocument read from level.dat.
    path is the file root was read from, if any, and is only used in error messages.
    Raises MalformedMetadataError naming the first missing or mistyped key; the FieldError describing it is chained as __cause__.
    """
    try:
        data = requireTag( root, "Data", TAG_Compound )
    except FieldError as e:
        raise MalformedMetadataError( "Data", path ) from e

    values = {}
    for key, attr, tagClass in METADATA_FIELDS:
        try:
            values[attr] = int( requireTag( data, key, tagClass, "Data" ) )
        except FieldError as e:
            raise MalformedMetadataError( key, path ) from e
    return WorldMetadata( **values )

def decodeItem( compound, prefix="Item" ):
    """Returns an Item decoded from an item compound. All of its fields are required."""
    return Item( **_decodeFields( compound, ITEM_FIELDS, prefix ) )

def decodeEntity( compound, prefix="" ):
    """
    Returns an Entity decoded from an entity compound.
    prefix names the compound in error messages (e.g. "Level.Entities[0]").
    """
    values = _decodeFields( compound, ENTITY_FIELDS, prefix )

    pos    = requireList( compound, "Pos",      TAG_Double, 3, prefix )
    motion = requireList( compound, "Motion",   TAG_Double, 3, prefix )
    rot    = requireList( compound, "Rotation", TAG_Float,  2, prefix )
    values["physics"] = Physics(
        Position( float( pos[0] ),    float( pos[1] ),    float( pos[2] )    ),
        Velocity( float( motion[0] ), float( motion[1] ), float( motion[2] ) ),
        #yaw is stored second, pitch first; there is no roll
        Euler( float( rot[1] ), float( rot[0] ), 0.0 )
    )

    for key, attr, tagClass in ENTITY_OPTIONAL_FIELDS:
        v = optionalTag( compound, key, tagClass, prefix )
        if v is not None:
            values[attr] = int( v )

    item = optionalTag( compound, "Item", TAG_Compound, prefix )
    if item is not None:
        values["item"] = decodeItem( item, _label( prefix, "Item" ) )

    return Entity( **values )

def decodeEntities( ls, prefix="Entities" ):
    """
    Returns a list of Entity decoded from ls, a TAG_List of entity compounds, in list order.
    An empty list may have any entry type (usually TAG_End or TAG_Byte); a non-empty one must hold TAG_Compounds.
    """
    if len( ls ) == 0:
        return []
    entities = []
    for i, e in enumerate( ls ):
        label = "{}[{:d}]".format( prefix, i )
        t = _tagType( e )
        if t != TAG_Compound.tagType:
            raise UnexpectedFieldTypeError( label, TAG_Compound.tagType, t )
        entities.append( decodeEntity( e, label ) )
    return entities

def decodeLevel( compound, prefix="Level" ):
    """Returns a Level decoded from a chunk's "Level" compound."""
    values = {}
    for key, attr, length in LEVEL_ARRAYS:
        a = requireTag( compound, key, TAG_Byte_Array, prefix )
        if len( a ) != length:
            raise FieldLengthError( _label( prefix, key ), length, len( a ) )
        values[attr] = bytes( a )

    values.update( _decodeFields( compound, LEVEL_FIELDS, prefix ) )

    values["entities"] = decodeEntities( requireTag( compound, "Entities", TAG_List, prefix ), _label( prefix, "Entities" ) )

    #Tile entities are passed through as-is; they only have to exist.
    tileEntities = compound.get( "TileEntities" )
    if tileEntities is None:
        raise MissingFieldError( _label( prefix, "TileEntities" ), TAG_List.tagType )
    values["tileEntities"] = tileEntities

    return Level( **values )

def decodeChunk( root ):
    """Returns a Chunk decoded from root, the NBTDocument read from a chunk file."""
    return Chunk( decodeLevel( requireTag( root, "Level", TAG_Compound ) ) )
