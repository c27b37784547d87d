"""
alphaworld is a library for reading Minecraft worlds saved in the Alpha level format with Python 3.
It reads the Named Binary Tag (NBT) files these worlds are made of, and decodes them into world metadata, chunks, and entities.
It also honors the session lock these worlds use to tell programs when someone else has opened the world.
"""

#NBT Tag Types, Exceptions
from alphaworld.shared import (
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY,
    TAG_COUNT,
    NBTFormatError, WrongTagError, DuplicateNameError, UnknownTagTypeError, NestingDepthError, OutOfBoundsError
)

#read, NBTDocument and TAG_* Classes
from alphaworld.tag import read, NBTDocument, TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array

#Alpha worlds
from alphaworld.mc.world import openWorld, iterWorlds, World
from alphaworld.mc.world.lock import SessionLock
from alphaworld.mc.world.coords import chunkKey, splitChunkKey, chunkPath
from alphaworld.mc.world.model import WorldMetadata, Chunk, Level, Entity, Item, Physics, Position, Velocity, Euler
from alphaworld.mc.world.errors import (
    WorldError, WorldNotFoundError, NotAWorldDirectoryError, WorldDirectoryReadError, MissingMetadataFileError, MissingLockFileError,
    SessionLockError, LockOpenError, LockWriteError, LockReadError, ClockUnavailableError, SessionLockStolenError,
    FieldError, MissingFieldError, UnexpectedFieldTypeError, FieldLengthError,
    MalformedMetadataError, ChunkNotFoundError, ChunkDecodeError
)


#Export everything we imported above
__all__ = [
    "TAG_END", "TAG_BYTE", "TAG_SHORT", "TAG_INT", "TAG_LONG", "TAG_FLOAT", "TAG_DOUBLE", "TAG_BYTE_ARRAY", "TAG_STRING", "TAG_LIST", "TAG_COMPOUND", "TAG_INT_ARRAY",
    "TAG_COUNT",
    "NBTFormatError", "WrongTagError", "DuplicateNameError", "UnknownTagTypeError", "NestingDepthError", "OutOfBoundsError",
    "read", "NBTDocument", "TAG_Byte", "TAG_Short", "TAG_Int", "TAG_Long", "TAG_Float", "TAG_Double", "TAG_Byte_Array", "TAG_String", "TAG_List", "TAG_Compound", "TAG_Int_Array",
    "openWorld", "iterWorlds", "World", "SessionLock",
    "chunkKey", "splitChunkKey", "chunkPath",
    "WorldMetadata", "Chunk", "Level", "Entity", "Item", "Physics", "Position", "Velocity", "Euler",
    "WorldError", "WorldNotFoundError", "NotAWorldDirectoryError", "WorldDirectoryReadError", "MissingMetadataFileError", "MissingLockFileError",
    "SessionLockError", "LockOpenError", "LockWriteError", "LockReadError", "ClockUnavailableError", "SessionLockStolenError",
    "FieldError", "MissingFieldError", "UnexpectedFieldTypeError", "FieldLengthError",
    "MalformedMetadataError", "ChunkNotFoundError", "ChunkDecodeError"
]
