from hypothesis import settings

# First examples pay for building the projection and the atan2 table
settings.register_profile("roadgeometry", deadline=None)
settings.load_profile("roadgeometry")
