class CommandDispatcher:
    def __init__(self):
        self.commands = {}

    def register_command(self, command_name: str, handler):
        self.commands[command_name.lower()] = handler

    def dispatch(self, command_name: str, parsed_args):
        """Dispatch command with parsed arguments"""
        command_name = command_name.lower()

        if command_name not in self.commands:
            raise ValueError(f"Command '{command_name}' not recognized.")

        return self.commands[command_name](parsed_args)
