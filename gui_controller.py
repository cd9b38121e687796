import time
import dearpygui.dearpygui as dpg

from nbody import config


def _make_callbacks(shared):
    def g_cb(sender, app_data, user_data):
        shared['G'] = float(app_data)
    def friction_cb(sender, app_data, user_data):
        shared['friction'] = float(app_data)
    def max_velocity_cb(sender, app_data, user_data):
        shared['max_velocity'] = float(app_data)
    def substeps_cb(sender, app_data, user_data):
        shared['substeps'] = int(app_data)
    def pause_cb():
        shared['toggle_pause'] = True
    def reset_cb():
        shared['reset_world'] = True
    def spawn_cb():
        shared['spawn_random'] = True
    def exit_cb():
        shared['__exit__'] = True
    return g_cb, friction_cb, max_velocity_cb, substeps_cb, pause_cb, reset_cb, spawn_cb, exit_cb


def run_gui(shared):
    """
    Run DearPyGui in its own process. Writes values into `shared` dict.
    """
    dpg.create_context()

    g_cb, friction_cb, max_velocity_cb, substeps_cb, pause_cb, reset_cb, spawn_cb, exit_cb = _make_callbacks(shared)

    with dpg.window(label="Simulation Controls", tag="controls_window", width=380, height=360):
        dpg.add_text("Gravity")
        dpg.add_slider_float(label="G", tag="g_slider", default_value=float(shared.get('G', config.G)),
                             min_value=0.0, max_value=50.0, callback=g_cb)
        dpg.add_text("Bounce friction")
        dpg.add_slider_float(label="Friction", tag="friction_slider", default_value=float(shared.get('friction', config.FRICTION)),
                             min_value=0.0, max_value=0.99, callback=friction_cb)
        dpg.add_text("Velocity cap")
        dpg.add_slider_float(label="Max velocity", tag="max_velocity_slider",
                             default_value=float(shared.get('max_velocity', config.MAX_VELOCITY)),
                             min_value=1.0, max_value=5000.0, callback=max_velocity_cb)
        dpg.add_text("Integration substeps")
        dpg.add_slider_int(label="Substeps", tag="substeps_slider", default_value=int(shared.get('substeps', config.SUBSTEPS)),
                           min_value=1, max_value=32, callback=substeps_cb)
        dpg.add_separator()
        dpg.add_button(label="Pause / Toggle", callback=lambda s, a, u: pause_cb())
        dpg.add_button(label="Clear Bodies", callback=lambda s, a, u: reset_cb())
        dpg.add_button(label="Spawn Random Body", callback=lambda s, a, u: spawn_cb())
        dpg.add_button(label="Exit GUI", callback=lambda s, a, u: exit_cb())
        dpg.add_spacer()
        dpg.add_text("Status:", tag="status_label")
        dpg.add_text("", tag="status_text")

    dpg.create_viewport(title='Simulation Controls', width=400, height=400)
    dpg.set_primary_window("controls_window", True)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    try:
        while not shared.get('__exit__', False) and dpg.is_dearpygui_running():
            status = (f"bodies={shared.get('bodies', 0)}, step={float(shared.get('step_ms', 0.0)):.2f} ms, "
                      f"collisions={shared.get('collisions', 0)}")
            dpg.set_value("status_text", status)
            dpg.render_dearpygui_frame()
            time.sleep(0.01)
    finally:
        dpg.destroy_context()


if __name__ == "__main__":
    from multiprocessing import Manager
    mgr = Manager()
    shared = mgr.dict()
    shared['G'] = config.G
    shared['friction'] = config.FRICTION
    shared['max_velocity'] = config.MAX_VELOCITY
    shared['substeps'] = config.SUBSTEPS
    run_gui(shared)
