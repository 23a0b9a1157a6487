import pytest

from asset_queue.core.asset_queue import AssetQueue
from asset_queue.core.errors import (
	DuplicateAssetError, MalformedLoaderError, MissingAssetNameError, NoExtensionError,
	NoLoaderFoundError,
)
from asset_queue.core.events import LoadEvent
from asset_queue.enums import AssetStatus
from asset_queue.loaders.image import ImageLoader


def check_counters(assets):
	assert assets.remaining >= 0
	assert assets.total >= 0
	assert assets.current + assets.remaining == assets.total


def test_default_image_loader_registered():
	assets = AssetQueue()
	for key in ("png", "gif", "jpg", "jpeg", "image/png", "image/jpeg"):
		assert assets.loaders.get(key) is ImageLoader


def test_no_defaults():
	assert len(AssetQueue(register_defaults=False).loaders) == 0


def test_add_counts(assets):
	names = [f"img{i}.png" for i in range(5)]
	for i, name in enumerate(names, 1):
		assets.add(name)
		assert assets.total == i
		assert assets.remaining == i
		check_counters(assets)

	assert [d.name for d in assets.assets] == names
	assert all(d.status is AssetStatus.QUEUED for d in assets.assets)


def test_add_returns_value_immediately(assets, manual_loader):
	value = assets.add("a.png")

	assert value is manual_loader.tasks["a.png"].value
	assert assets.get("a.png") is value
	assert not manual_loader.tasks["a.png"].started


def test_add_passes_arguments(assets, manual_loader):
	assets.add("frame0.png", "path/to/frame1.png", flip=True)

	task = manual_loader.tasks["frame0.png"]
	assert task.args == ("path/to/frame1.png",)
	assert task.kwargs == {"flip": True}


def test_add_all(assets):
	values = assets.add_all(["a.png", "b.gif"])

	assert values == [assets.get("a.png"), assets.get("b.gif")]
	assert assets.total == 2


def test_add_duplicate(assets):
	first = assets.add("x.png")

	with pytest.raises(DuplicateAssetError):
		assets.add("x.png")

	assert assets.get("x.png") is first
	assert assets.get_status("x.png") is AssetStatus.QUEUED
	assert assets.total == 1
	assert assets.remaining == 1


def test_add_no_extension(assets):
	with pytest.raises(NoExtensionError):
		assets.add("sprite")
	assert assets.total == 0


def test_add_unknown_extension(assets):
	with pytest.raises(NoLoaderFoundError):
		assets.add("music.ogg")


@pytest.mark.parametrize("name", ["", None])
def test_add_missing_name(assets, name):
	with pytest.raises(MissingAssetNameError):
		assets.add(name)
	with pytest.raises(MissingAssetNameError):
		assets.add_as(lambda n: None, name)


def test_add_as_missing_loader(assets):
	with pytest.raises(NoLoaderFoundError):
		assets.add_as(None, "thing")


def test_add_as_generic_name(assets, manual_loader):
	value = assets.add_as(manual_loader, "player_sprite")

	assert value is manual_loader.tasks["player_sprite"].value
	assert "player_sprite" in assets


def test_add_as_malformed_loader(assets):
	class NoStart:
		value = None

	class NotCallable:
		value = None
		start = "soon"

	with pytest.raises(MalformedLoaderError):
		assets.add_as(lambda name: NoStart(), "a")
	with pytest.raises(MalformedLoaderError):
		assets.add_as(lambda name: NotCallable(), "b")

	assert len(assets) == 0
	assert assets.total == 0


def test_update_empty_queue():
	assets = AssetQueue()
	assert assets.update()
	assert not assets.loading


def test_full_load(assets, manual_loader, recorder):
	assets.add("a.png")
	assets.add("b.gif")
	assert (assets.total, assets.remaining) == (2, 2)

	assets.load()

	assert manual_loader.start_order == ["a.png", "b.gif"]
	assert assets.get_status("a.png") is AssetStatus.LOADING
	assert assets.loading
	assert recorder.of("started") == [LoadEvent(0, 2)]

	manual_loader.tasks["b.gif"].complete()
	check_counters(assets)
	manual_loader.tasks["a.png"].complete()
	check_counters(assets)

	assert [ev.current for ev in recorder.of("progress")] == [1, 2]
	assert [ev.name for ev in recorder.of("progress")] == ["b.gif", "a.png"]
	assert recorder.of("finished") == [LoadEvent(2, 2)]
	assert recorder.of("error") == []
	assert assets.remaining == 0
	assert not assets.loading
	assert assets.update()


def test_error_scenario(assets, manual_loader, recorder):
	assets.add("a.png")
	assets.add("b.gif")
	assets.load()

	manual_loader.tasks["a.png"].complete()
	manual_loader.tasks["b.gif"].fail()

	assert recorder.kinds() == ["started", "progress", "error", "progress", "finished"]
	assert recorder.of("error") == [LoadEvent(2, 2, "b.gif")]
	assert recorder.events[3] == ("progress", LoadEvent(2, 2, "b.gif"))
	assert recorder.of("finished") == [LoadEvent(2, 2)]
	assert assets.is_loaded("a.png")
	assert not assets.is_loaded("b.gif")
	assert assets.get_status("b.gif") is AssetStatus.FAILED


def test_update_starts_one_per_call(assets, manual_loader, recorder):
	assets.add_all(["a.png", "b.png", "c.png"])

	assert not assets.update()
	assert manual_loader.start_order == ["a.png"]
	assert len(recorder.of("started")) == 1

	manual_loader.tasks["a.png"].complete()
	assert not assets.update()
	assert manual_loader.start_order == ["a.png", "b.png"]
	# Only the first update of a round announces the start
	assert len(recorder.of("started")) == 1

	assert not assets.update()
	manual_loader.tasks["b.png"].complete()
	manual_loader.tasks["c.png"].complete()
	assert assets.update()
	assert len(recorder.of("finished")) == 1


def test_update_returns_false_until_landed(assets, manual_loader):
	assets.add("a.png")

	assert not assets.update()
	assert not assets.update()

	manual_loader.tasks["a.png"].complete()
	assert assets.update()


def test_synchronous_loader(assets, recorder):
	class Instant:
		extensions = ("txt",)

		def __init__(self, name):
			self.value = name.upper()

		def start(self, on_complete, on_error):
			on_complete()

	assets.register_loader(Instant)
	assets.add("a.txt")
	assets.add("b.txt")

	assert not assets.update()
	assert assets.update()
	assert recorder.kinds() == ["started", "progress", "progress", "finished"]
	assert assets.get("b.txt") == "B.TXT"


def test_remove_missing(assets, recorder):
	assert assets.remove("nope.png") is None
	assert recorder.events == []


def test_remove_pending(assets, manual_loader):
	assets.add("a.png")
	value = assets.add("b.png")

	assert assets.remove("b.png") is value
	assert "b.png" not in assets
	assert assets.get_descriptor("b.png") is None
	assert (assets.total, assets.remaining) == (1, 1)

	assets.load()
	assert manual_loader.start_order == ["a.png"]


def test_remove_in_flight_then_callback(assets, manual_loader, recorder):
	assets.add("a.png")
	assets.add("b.png")
	assets.load()

	manual_loader.tasks["a.png"].complete()
	assets.remove("b.png")

	assert (assets.total, assets.remaining) == (1, 0)
	finished = recorder.of("finished")
	assert finished == [LoadEvent(0, 0)]
	assert not assets.loading

	manual_loader.tasks["b.png"].complete()

	assert (assets.total, assets.remaining) == (1, 0)
	assert recorder.of("finished") == finished
	assert len(recorder.of("progress")) == 1
	check_counters(assets)


def test_remove_in_flight_failure_ignored(assets, manual_loader, recorder):
	assets.add("a.png")
	assets.add("b.png")
	assets.load()

	assets.remove("a.png")
	manual_loader.tasks["a.png"].fail()

	assert recorder.of("error") == []
	assert assets.remaining == 1
	check_counters(assets)


def test_remove_settled_asset(assets, manual_loader):
	assets.add_all(["a.png", "b.png"])
	assets.load()
	manual_loader.tasks["a.png"].complete()

	assets.remove("a.png")

	assert (assets.total, assets.remaining) == (1, 1)
	assert assets.loading


def test_remove_and_readd_ignores_old_callback(assets, manual_loader, recorder):
	assets.add("a.png")
	assets.update()
	old_task = manual_loader.tasks["a.png"]

	assets.remove("a.png")
	assets.add("a.png")
	old_task.complete()

	assert assets.get_status("a.png") is AssetStatus.QUEUED
	assert assets.remaining == 1


def test_remove_all(assets, manual_loader, recorder):
	assets.add_all(["a.png", "b.png"])
	assets.load()

	assets.remove_all()

	assert len(assets) == 0
	assert (assets.total, assets.remaining) == (0, 0)
	assert recorder.of("finished") == [LoadEvent(0, 0)]

	manual_loader.tasks["a.png"].complete()
	assert recorder.of("progress") == []
	assert assets.update()


def test_remove_all_when_idle(assets, recorder):
	assets.add("a.png")
	assets.destroy()

	assert recorder.events == []
	assert assets.total == 0


def test_double_callback_ignored(assets, manual_loader, recorder):
	assets.add_all(["a.png", "b.png"])
	assets.load()
	task = manual_loader.tasks["a.png"]

	task.complete()
	task.fail()

	assert assets.get_status("a.png") is AssetStatus.SUCCEEDED
	assert assets.remaining == 1
	assert recorder.of("error") == []


def test_invalidate(assets, manual_loader, recorder):
	assets.add_all(["a.png", "b.png"])
	assets.load()
	for task in list(manual_loader.tasks.values()):
		task.complete()
	assert assets.remaining == 0

	assets.invalidate()

	assert assets.total == 2
	assert assets.remaining == 2
	assert all(d.status is AssetStatus.QUEUED for d in assets.assets)
	assert not assets.update()
	assert len(recorder.of("started")) == 2


def test_invalidate_mid_flight_ignores_stale_callbacks(assets, manual_loader, recorder):
	assets.add_all(["a.png", "b.png"])
	assets.load()
	stale = manual_loader.tasks["a.png"]
	stale_complete = stale.on_complete

	assets.invalidate()
	stale_complete()

	assert assets.get_status("a.png") is AssetStatus.QUEUED
	assert assets.remaining == 2

	assets.load()
	manual_loader.tasks["a.png"].complete()
	manual_loader.tasks["b.png"].complete()
	assert assets.remaining == 0
	assert len(recorder.of("finished")) == 1


def test_invalidate_repopulates_pending(assets, manual_loader):
	assets.add_all(["a.png", "b.png"])
	assets.load()
	manual_loader.tasks["a.png"].complete()
	manual_loader.tasks["b.png"].complete()
	manual_loader.start_order.clear()

	assets.invalidate()
	assets.load()

	assert manual_loader.start_order == ["a.png", "b.png"]


def test_multiple_listeners(assets, manual_loader, recorder):
	seen = []
	assets.push_handlers(on_load_progress=lambda ev: seen.append(ev.name))

	assets.add("a.png")
	assets.load()
	manual_loader.tasks["a.png"].complete()

	assert seen == ["a.png"]
	assert len(recorder.of("progress")) == 1


def test_common_loaders_copied_on_construct(common_loaders, manual_loader):
	class Txt:
		extensions = ("txt",)

	AssetQueue.register_common_loader(Txt)
	before = AssetQueue()

	class Later:
		extensions = ("json",)

	AssetQueue.register_common_loader(Later)
	after = AssetQueue()

	assert before.loaders.get("txt") is Txt
	assert "json" not in before.loaders
	assert after.loaders.get("json") is Later

	before.register_loader(manual_loader)
	assert common_loaders.get("png") is not manual_loader


def test_queue_loader_overrides_default(assets, manual_loader):
	assert assets.loaders.get("png") is manual_loader
	assert AssetQueue().loaders.get("png") is ImageLoader
