#Typed model of an Alpha world's level.dat and chunk files.
#Instances are produced by alphaworld.mc.world.decode; see that module for the NBT keys each attribute comes from.

class WorldMetadata:
    """
    World-level facts stored in level.dat.
    WorldMetadata is immutable; re-open the world to see changes made on disk.
    """
    __slots__ = ( "snowCovered", "time", "spawnX", "spawnY", "spawnZ", "lastPlayed", "sizeOnDisk", "randomSeed" )

    def __init__( self, snowCovered, time, spawnX, spawnY, spawnZ, lastPlayed, sizeOnDisk, randomSeed ):
        _set = object.__setattr__
        _set( self, "snowCovered", snowCovered ) #8-bit flag
        _set( self, "time",        time        ) #World time in ticks
        _set( self, "spawnX",      spawnX      )
        _set( self, "spawnY",      spawnY      )
        _set( self, "spawnZ",      spawnZ      )
        _set( self, "lastPlayed",  lastPlayed  ) #Milliseconds since the unix epoch
        _set( self, "sizeOnDisk",  sizeOnDisk  ) #Bytes
        _set( self, "randomSeed",  randomSeed  )

    def __setattr__( self, name, value ):
        raise AttributeError( "WorldMetadata is read-only." )

    def __delattr__( self, name ):
        raise AttributeError( "WorldMetadata is read-only." )

    def getSpawn( self ):
        """Returns the spawn point as a tuple of block coordinates, (x, y, z)."""
        return ( self.spawnX, self.spawnY, self.spawnZ )
    spawn = property( getSpawn )

    def __eq__( self, other ):
        if not isinstance( other, WorldMetadata ):
            return NotImplemented
        return all( getattr( self, n ) == getattr( other, n ) for n in self.__slots__ )

    def __hash__( self ):
        return hash( tuple( getattr( self, n ) for n in self.__slots__ ) )

    def __repr__( self ):
        return "WorldMetadata({})".format( ", ".join( "{}={!r}".format( n, getattr( self, n ) ) for n in self.__slots__ ) )

class Chunk:
    """A 16x128x16 column of the world, loaded from a single chunk file."""
    __slots__ = ( "level", )

    def __init__( self, level ):
        self.level = level

    def __repr__( self ):
        return "Chunk({:d}, {:d})".format( self.level.xPos, self.level.zPos )

class Level:
    """
    The contents of a chunk.

    blocks, data, skyLight, blockLight and heightMap are fixed-length bytes objects:
        blocks has one byte per block (32768); data, skyLight and blockLight have one nibble per block (16384 bytes);
        heightMap has one byte per column (256).
    Block arrays are indexed in XZY order: i = y + 128*z + 2048*x.
    entities is a list of Entity in file order.
    tileEntities is the TAG_List read from the file, left undecoded.
    """
    __slots__ = (
        "blocks", "data", "skyLight", "heightMap", "blockLight",
        "entities", "tileEntities", "lastUpdate", "xPos", "zPos", "terrainPopulated"
    )

    def __init__( self, blocks, data, skyLight, heightMap, blockLight, entities, tileEntities, lastUpdate, xPos, zPos, terrainPopulated ):
        self.blocks           = blocks
        self.data             = data
        self.skyLight         = skyLight
        self.heightMap        = heightMap
        self.blockLight       = blockLight
        self.entities         = entities
        self.tileEntities     = tileEntities
        self.lastUpdate       = lastUpdate        #World time (ticks) of the last update
        self.xPos             = xPos              #Chunk coordinates
        self.zPos             = zPos
        self.terrainPopulated = terrainPopulated  #8-bit flag

    def __repr__( self ):
        l = len( self.entities )
        return "Level({:d}, {:d}, {:d} entit{})".format( self.xPos, self.zPos, l, "ies" if l != 1 else "y" )

class Entity:
    """
    A mob, dropped item, projectile, falling block, etc. saved in a chunk.
    health, age, tile and item are None unless the entity's save data has them.
    """
    __slots__ = ( "id", "onGround", "air", "fire", "fallDistance", "physics", "health", "age", "tile", "item" )

    def __init__( self, id, onGround, air, fire, fallDistance, physics, health=None, age=None, tile=None, item=None ):
        self.id           = id
        self.onGround     = onGround
        self.air          = air
        self.fire         = fire
        self.fallDistance = fallDistance
        self.physics      = physics
        self.health       = health
        self.age          = age
        self.tile         = tile
        self.item         = item

    def __repr__( self ):
        return "Entity({!r}, {!r})".format( self.id, self.physics.position )

class Item:
    """An item stack, as carried by a dropped item entity."""
    __slots__ = ( "id", "count", "damage" )

    def __init__( self, id, count, damage ):
        self.id     = id
        self.count  = count
        self.damage = damage

    def __eq__( self, other ):
        if not isinstance( other, Item ):
            return NotImplemented
        return ( self.id, self.count, self.damage ) == ( other.id, other.count, other.damage )

    def __repr__( self ):
        return "Item(id={:d}, count={:d}, damage={:d})".format( self.id, self.count, self.damage )

class Physics:
    __slots__ = ( "position", "velocity", "euler" )

    def __init__( self, position, velocity, euler ):
        self.position = position
        self.velocity = velocity
        self.euler    = euler

    def __repr__( self ):
        return "Physics({!r}, {!r}, {!r})".format( self.position, self.velocity, self.euler )

class Position:
    __slots__ = ( "x", "y", "z" )

    def __init__( self, x, y, z ):
        self.x = x
        self.y = y
        self.z = z

    def __iter__( self ):
        yield self.x
        yield self.y
        yield self.z

    def __repr__( self ):
        return "Position({!r}, {!r}, {!r})".format( self.x, self.y, self.z )

class Velocity:
    __slots__ = ( "dx", "dy", "dz" )

    def __init__( self, dx, dy, dz ):
        self.dx = dx
        self.dy = dy
        self.dz = dz

    def __iter__( self ):
        yield self.dx
        yield self.dy
        yield self.dz

    def __repr__( self ):
        return "Velocity({!r}, {!r}, {!r})".format( self.dx, self.dy, self.dz )

class Euler:
    """Orientation in degrees. Saves have no roll, so roll is always 0.0 for decoded entities."""
    __slots__ = ( "yaw", "pitch", "roll" )

    def __init__( self, yaw, pitch, roll=0.0 ):
        self.yaw   = yaw
        self.pitch = pitch
        self.roll  = roll

    def __iter__( self ):
        yield self.yaw
        yield self.pitch
        yield self.roll

    def __repr__( self ):
        return "Euler({!r}, {!r}, {!r})".format( self.yaw, self.pitch, self.roll )
