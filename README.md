# simeis

A space trading and mining game played through an HTTP JSON API, built on
aiohttp. Each player starts with a station in an unexplored sector of the
galaxy and some money. From there you buy ships, hire crew, fit mining and
gas-sucking modules, fly to planets to extract resources, bring them back to
your station and sell them on a shared market whose prices move over time and
react to every trade.

Crew members draw wages continuously; if your money falls below zero, you lose.

## What is in the package

- `simeis.game.Game` holds the whole world: players, the galaxy, the market
  and the per-player event log. `Game.run()` is a coroutine that updates the
  world every 20 ms (ships fly, extraction fills cargo holds, wages are paid,
  market prices drift) until `Game.stop()` is awaited.
- `simeis.api.setup_routes(app, testing=False)` registers the player, ship and
  market endpoints on an `aiohttp.web.Application`.
- `simeis.api_station.setup_routes(app)` registers the station endpoints.
- The handlers find the game through `app[simeis.api.GAME_KEY]`.

The engine modules (`simeis.galaxy`, `simeis.station`, `simeis.ship`,
`simeis.market`, `simeis.player`, ...) can also be used on their own, without
the HTTP layer.

## What the package does not do

The package installs no command and has no ready-made server entry point. To
serve the game you assemble the aiohttp application yourself and start the
game loop alongside it, for example:

```python
import asyncio

from aiohttp import web

from simeis import api, api_station
from simeis.game import Game


def make_app() -> web.Application:
    game = Game()
    app = web.Application()
    app[api.GAME_KEY] = game
    api.setup_routes(app)
    api_station.setup_routes(app)

    async def game_loop(app):
        task = asyncio.create_task(game.run())
        yield
        await game.stop()
        await task

    app.cleanup_ctx.append(game_loop)
    return app


web.run_app(make_app(), host="127.0.0.1", port=8080)
```

World state lives in memory only; nothing is saved when the process exits.

### Testing mode

`Game(testing=True)` does not advance on its own: each update happens when a
`GameSignal.TICK` is sent with `Game.send_signal`. Passing `testing=True` to
`simeis.api.setup_routes` adds a `/tick` endpoint that does this. In testing
mode, players whose name starts with `test-rich` start with ten thousand times
the usual money, and market prices do not drift.

## Playing

Every response is a JSON object with an `"error"` field. It is `"ok"` on
success; otherwise it holds a human-readable message and a `"type"` field
names the kind of error.

Create a player:

```
GET /player/new/{name}
```

The reply contains your `playerId` and a base64 `key`. Pass the key,
URL-encoded, as the `key` query parameter on every other request that acts on
your behalf.

Some of the available endpoints:

| Endpoint | Purpose |
| --- | --- |
| `/ping` | Check the server is up |
| `/player/{id}` | Player status (full details with your own key) |
| `/syslogs` | Events that happened to you since the last call |
| `/station/{station_id}` | Station status: crew, cargo, trader |
| `/station/{station_id}/shipyard/list` | Ships for sale |
| `/station/{station_id}/shipyard/buy/{ship_id}` | Buy a ship |
| `/station/{station_id}/crew/hire/{crewtype}` | Hire a pilot, operator, trader or soldier |
| `/station/{station_id}/crew/assign/{crewid}/{shipid}/pilot` | Put a pilot on a ship |
| `/station/{station_id}/crew/assign/{crewid}/trading` | Make a crew member the station trader |
| `/station/{station_id}/shop/modules/{ship_id}/buy/{modtype}` | Fit a `Miner` or `GasSucker` module |
| `/station/{station_id}/scan` | Scan the surrounding sector for planets and stations |
| `/ship/{ship_id}/travelcost/{x}/{y}/{z}` | Estimate a trip |
| `/ship/{ship_id}/navigate/{x}/{y}/{z}` | Start flying |
| `/ship/{ship_id}/extraction/start` | Extract resources from the planet you are on |
| `/ship/{ship_id}/unload/{resource}/{amount}` | Unload cargo into your station |
| `/market/prices` | Current market prices |
| `/market/{station_id}/buy/{resource}/{amount}` | Buy from the market |
| `/market/{station_id}/sell/{resource}/{amount}` | Sell to the market |
| `/resources` | Price, volume and extraction difficulty of each resource |
| `/gamestats` | Overview of every player |

Resource, crew, module and upgrade names are matched case-insensitively.