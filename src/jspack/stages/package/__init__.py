from .jar import JarStage, jar

__all__ = ["JarStage", "jar"]
