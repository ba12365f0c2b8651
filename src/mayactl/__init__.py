"""mayactl - turn this machine into a Maya server"""

__version__ = "0.1.0"
