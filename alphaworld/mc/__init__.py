#Minecraft-specific code built on top of alphaworld's NBT support.
