import asyncio

from flasync import ChainSettings, configure_logging, flasync, load_settings


class Writer:
    """A fluent writer mixing instant and delayed writes."""

    def __init__(self, settings: ChainSettings = None):
        self.lines = []
        flasync(self, settings)
        self.write_sync = self.asyncify(self._write_sync)
        self.write = self.async_(self._write)
        self.pause = self.async_(self._pause)

    def _write_sync(self, key, value):
        self.lines.append(f"{key}:{value}")
        return self

    def _write(self, key, value, done):
        def _later():
            self._write_sync(key, value)
            done()

        asyncio.get_running_loop().call_later(0.1, _later)
        return self

    async def _pause(self, seconds):
        await asyncio.sleep(seconds)


async def main():
    settings = load_settings()
    configure_logging(settings)

    writer = Writer(settings)
    writer.on_error(lambda err: print("Chain failed:", err))

    writer.write("fou", "foo").write_sync("base", "baz").pause(0.2).write_sync("done", "yes")
    await writer.wait()
    return writer.lines


if __name__ == "__main__":
    print("Lines:", asyncio.run(main()))
