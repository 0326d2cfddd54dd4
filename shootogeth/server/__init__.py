"""Game server: client registry, message processing, fixed-step loop and UDP transport."""