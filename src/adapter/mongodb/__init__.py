CATS_COLLECTION_NAME = 'cats'
DOGS_COLLECTION_NAME = 'dogs'
USERS_COLLECTION_NAME = 'users'
COUNTERS_COLLECTION_NAME = 'counters'
