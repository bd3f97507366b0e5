"""Basic feedkeeper usage: save a feed locally and load it back.

This example demonstrates the simplest use case: a LocalFeedLoader on a
file store in the project's .feedkeeper directory.
"""

from uuid import uuid4

from feedkeeper import (
    Failure,
    FeedImage,
    FileFeedStore,
    LocalFeedLoader,
    default_store_path,
    system_clock,
)


images = [
    FeedImage(id=uuid4(), url="https://images.example.com/pier.jpg", location="Brighton"),
    FeedImage(id=uuid4(), url="https://images.example.com/dunes.jpg"),
]

# Store operations run on the store's own worker thread. Leaving the
# with block waits for queued work and stops that thread.
with FileFeedStore(default_store_path()) as store:
    loader = LocalFeedLoader(store, clock=system_clock)

    # save() replaces any previous snapshot and returns a Future
    loader.save(images).result()

    # load() returns Success(images) while the snapshot is fresh,
    # Success([]) once it is older than 7 days
    result = loader.load().result()

if isinstance(result, Failure):
    print(f"Could not read cache: {result.error}")
else:
    for image in result.items:
        print(image.id, image.url)
