"""ADT Java 7 patch - jar workflow around the class-file core."""
