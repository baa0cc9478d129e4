from commander import *

cmdr = Commander(shell=True)

engine = cmdr.add_category("Engine")
climate = cmdr.add_category("Climate")
information = cmdr.add_category("Information")


@arguments
class StartArgs:
    quiet: bool = Flag(usage="Start the engine quietly")


@arguments
class ACArgs:
    temperature: int = Flag(default="22", usage="Temperature in Celsius")
    fanspeed: int = Flag(default="3", usage="Fan speed (1-5)")


@arguments
class HeatArgs:
    temperature: int = Flag(default="20", usage="Temperature in Celsius")


@engine.command("start", "Starts the car engine")
def start(context, arguments: StartArgs):
    if arguments.quiet:
        context.echo("Starting engine quietly...")
    else:
        context.echo("Vroom! Engine started!")


@engine.command("stop", "Stops the car engine")
def stop(context):
    context.echo("Engine stopped")


@climate.command("ac", "Controls the air conditioning")
def ac(context, arguments: ACArgs):
    context.echo("Setting AC to %d°C with fan speed %d" % (arguments.temperature, arguments.fanspeed))


@climate.command("heat", "Controls the heating system")
def heat(context, arguments: HeatArgs):
    context.echo("Setting heating temperature to %d°C" % arguments.temperature)


@information.command("status", "Shows car status")
def status(context):
    context.echo("Engine: Running\nFuel: 75%\nTemperature: 22°C")


@information.command("fuel", "Shows fuel level")
def fuel(context):
    context.echo("Fuel level: 75%")


if __name__ == '__main__':
    cmdr.run()
