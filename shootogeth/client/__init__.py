"""Game client: entity store, inputs, systems, UDP connection and pygame window."""